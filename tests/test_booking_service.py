"""Tests for booking creation, conflict detection, history and cancellation."""

from datetime import date

import pytest

from app.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.models import Booking
from app.schemas.booking import BookingOptions
from app.services import background
from app.services.booking_service import ACTIVE_BOOKING_MESSAGE, BookingService
from tests.conftest import CUSTOMER_ID, make_booking

JUNE_1 = date(2025, 6, 1)


async def _create(service: BookingService, booking_date: date = JUNE_1, **kwargs) -> Booking:
    values = dict(
        customer_id=CUSTOMER_ID,
        customer_name="Jane Doe",
        booking_date=booking_date,
        preferred_time="09:00",
        address="12 Harbour Road",
        service_type="Bin Cleaning",
        estimated_price=45.0,
    )
    values.update(kwargs)
    return await service.create_booking(**values)


class TestHasActiveBooking:
    @pytest.mark.parametrize("status", ["pending", "approved", "assigned", "Approved"])
    async def test_active_statuses_block_the_date(self, db, status):
        await make_booking(db, status=status)
        assert await BookingService(db).has_active_booking(CUSTOMER_ID, JUNE_1) is True

    @pytest.mark.parametrize("status", ["cancelled", "completed", "in progress", "archived"])
    async def test_other_statuses_do_not_block(self, db, status):
        await make_booking(db, status=status)
        assert await BookingService(db).has_active_booking(CUSTOMER_ID, JUNE_1) is False

    async def test_only_exact_date_matches(self, db):
        await make_booking(db, booking_date=date(2025, 6, 2))
        assert await BookingService(db).has_active_booking(CUSTOMER_ID, JUNE_1) is False

    async def test_other_customers_are_ignored(self, db):
        await make_booking(db, customer_id="someone-else")
        assert await BookingService(db).has_active_booking(CUSTOMER_ID, JUNE_1) is False

    async def test_no_bookings(self, db):
        assert await BookingService(db).has_active_booking(CUSTOMER_ID, JUNE_1) is False


class TestCreateBooking:
    async def test_new_booking_defaults(self, db, mail):
        booking = await _create(BookingService(db, mail=mail))

        stored = await db.get(Booking, booking.id)
        assert stored.status == "pending"
        assert stored.payment_status == "pending"
        assert float(stored.final_price) == 0.0
        assert stored.is_price_set is False
        assert float(stored.estimated_price) == 45.0

    async def test_empty_options_are_not_stored(self, db, mail):
        booking = await _create(
            BookingService(db, mail=mail),
            options=BookingOptions(bin_size="240L", carpet_size="", special_request=""),
        )
        assert booking.bin_size == "240L"
        assert booking.carpet_size is None
        assert booking.special_request is None

    async def test_conflict_writes_nothing(self, db, mail):
        service = BookingService(db, mail=mail)
        await _create(service)

        with pytest.raises(ConflictError) as exc_info:
            await _create(service, address="Somewhere else")

        assert exc_info.value.message == ACTIVE_BOOKING_MESSAGE
        bookings = await service.list_bookings(CUSTOMER_ID)
        assert len(bookings) == 1

    async def test_rebooking_allowed_after_cancellation(self, db, mail):
        service = BookingService(db, mail=mail)
        first = await _create(service)
        await service.cancel_booking(CUSTOMER_ID, first.id)

        second = await _create(service)
        assert second.id != first.id

    async def test_concurrent_insert_rejected_by_store(self, db, mail, monkeypatch):
        """A submission that passed the check but lost the race still gets a conflict."""
        await make_booking(db, status="approved")
        service = BookingService(db, mail=mail)

        async def stale_check(customer_id, booking_date):
            return False

        monkeypatch.setattr(service, "has_active_booking", stale_check)

        with pytest.raises(ConflictError):
            await _create(service)

    async def test_confirmation_email_sent_in_background(self, db, mail):
        await _create(BookingService(db, mail=mail), customer_email="jane@example.com")
        await background.drain(timeout=5)

        assert len(mail.sent) == 1
        assert mail.sent[0]["to"] == "jane@example.com"
        assert "2025-06-01" in mail.sent[0]["subject"]

    async def test_mail_failure_does_not_fail_booking(self, db, mail, monkeypatch):
        async def broken(*args, **kwargs):
            raise ConnectionError("smtp down")

        monkeypatch.setattr(mail, "send", broken)

        booking = await _create(BookingService(db, mail=mail), customer_email="jane@example.com")
        await background.drain(timeout=5)

        assert await db.get(Booking, booking.id) is not None


class TestListBookings:
    async def test_lists_only_own_bookings(self, db):
        await make_booking(db, booking_date=date(2025, 6, 1))
        await make_booking(db, booking_date=date(2025, 6, 8), status="completed", final_price=80)
        await make_booking(db, customer_id="someone-else")

        views = await BookingService(db).list_bookings(CUSTOMER_ID)

        assert len(views) == 2
        completed = next(v for v in views if v.status == "completed")
        assert completed.final_price == 80.0
        assert completed.address == "12 Harbour Road"
        assert completed.payment_status == "pending"


class TestCancelBooking:
    async def test_cancel_sets_status(self, db, mail):
        booking = await make_booking(db)
        await BookingService(db, mail=mail).cancel_booking(CUSTOMER_ID, booking.id)

        await db.refresh(booking)
        assert booking.status == "cancelled"

    async def test_cancel_twice_succeeds(self, db, mail):
        booking = await make_booking(db)
        service = BookingService(db, mail=mail)

        await service.cancel_booking(CUSTOMER_ID, booking.id)
        again = await service.cancel_booking(CUSTOMER_ID, booking.id)

        assert again.status == "cancelled"

    async def test_missing_booking(self, db):
        with pytest.raises(NotFoundError):
            await BookingService(db).cancel_booking(CUSTOMER_ID, "does-not-exist")

    async def test_other_customers_booking(self, db):
        booking = await make_booking(db, customer_id="someone-else")

        with pytest.raises(ForbiddenError):
            await BookingService(db).cancel_booking(CUSTOMER_ID, booking.id)

        await db.refresh(booking)
        assert booking.status == "pending"

    async def test_empty_id(self, db):
        with pytest.raises(ValidationError):
            await BookingService(db).cancel_booking(CUSTOMER_ID, "")

    async def test_cancellation_notice_needs_an_email(self, db, mail):
        with_email = await make_booking(db, customer_email="jane@example.com")
        without_email = await make_booking(db, booking_date=date(2025, 6, 2))
        service = BookingService(db, mail=mail)

        await service.cancel_booking(CUSTOMER_ID, with_email.id)
        await service.cancel_booking(CUSTOMER_ID, without_email.id)
        await background.drain(timeout=5)

        assert [m["to"] for m in mail.sent] == ["jane@example.com"]
        assert "cancelled" in mail.sent[0]["subject"]


async def test_book_then_cancel_releases_the_date(db, mail):
    service = BookingService(db, mail=mail)

    booking = await _create(service)
    assert await service.has_active_booking(CUSTOMER_ID, JUNE_1) is True

    await service.cancel_booking(CUSTOMER_ID, booking.id)
    assert await service.has_active_booking(CUSTOMER_ID, JUNE_1) is False
