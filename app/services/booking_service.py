import logging
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy import select

from app.core.database import utcnow
from app.core.errors import ConflictError, ForbiddenError, NotFoundError, StoreError, ValidationError
from app.models import Booking
from app.models.enums import ACTIVE_BOOKING_STATUSES, BookingStatus, PaymentStatus
from app.schemas.booking import BookingOptions, BookingView
from app.services.background import fire_and_forget
from app.services.mail_service import MailService

logger = logging.getLogger(__name__)

ACTIVE_BOOKING_MESSAGE = (
    "You already have an active booking for this date. "
    "Please cancel your existing booking or choose a different date."
)


class BookingService:
    """
    Service for creating, listing and cancelling customer bookings.

    Handles:
    - Rejecting a booking when the customer already holds an active one that day
    - Booking history for the customer
    - Cancellation with ownership checks
    - Best-effort confirmation / cancellation emails
    """

    def __init__(self, db: AsyncSession, mail: MailService | None = None):
        self.db = db
        self.mail = mail or MailService()

    async def has_active_booking(self, customer_id: str, booking_date: date) -> bool:
        """True if the customer has a pending, approved or assigned booking on that date."""
        try:
            result = await self.db.execute(
                select(Booking.status).where(
                    Booking.customer_id == customer_id,
                    Booking.booking_date == booking_date,
                )
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Could not check bookings: {e}") from e

        for status in result.scalars():
            if status and status.lower() in ACTIVE_BOOKING_STATUSES:
                return True
        return False

    async def create_booking(
        self,
        customer_id: str,
        customer_name: str,
        booking_date: date,
        preferred_time: str,
        address: str,
        service_type: str,
        estimated_price: float,
        options: BookingOptions | None = None,
        customer_email: str | None = None,
    ) -> Booking:
        """
        Create a new booking in pending status.

        Raises:
            ConflictError: the customer already has an active booking that day.
                Also raised when a concurrent submission wins the race and the
                store's unique index rejects this insert.
        """
        if await self.has_active_booking(customer_id, booking_date):
            raise ConflictError(ACTIVE_BOOKING_MESSAGE)

        options = options or BookingOptions()
        booking = Booking(
            customer_id=customer_id,
            customer_name=customer_name,
            customer_email=customer_email,
            address=address,
            booking_date=booking_date,
            preferred_time=preferred_time,
            status=BookingStatus.PENDING.value,
            service_type=service_type,
            estimated_price=estimated_price,
            final_price=0,
            is_price_set=False,
            payment_status=PaymentStatus.PENDING.value,
            bin_size=options.bin_size or None,
            carpet_size=options.carpet_size or None,
            special_request=options.special_request or None,
        )
        self.db.add(booking)

        try:
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.warning(
                "Concurrent booking for customer %s on %s rejected by store", customer_id, booking_date
            )
            raise ConflictError(ACTIVE_BOOKING_MESSAGE) from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Could not save booking: {e}") from e

        logger.info("Booking %s created for customer %s on %s", booking.id, customer_id, booking_date)

        fire_and_forget(
            self.mail.send_booking_confirmation(
                to_email=customer_email,
                customer_name=customer_name,
                booking_date=booking_date,
                preferred_time=preferred_time,
                address=address,
                service_type=service_type,
            ),
            label=f"booking-confirmation:{booking.id}",
        )
        return booking

    async def list_bookings(self, customer_id: str) -> list[BookingView]:
        """All bookings for a customer, newest first."""
        try:
            result = await self.db.execute(
                select(Booking)
                .where(Booking.customer_id == customer_id)
                .order_by(Booking.created_at.desc())
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Could not load bookings: {e}") from e

        return [self._to_view(b) for b in result.scalars().all()]

    async def cancel_booking(self, customer_id: str, booking_id: str) -> Booking:
        """
        Cancel one of the customer's bookings.

        Cancelling an already-cancelled booking succeeds and leaves it cancelled.
        """
        if not booking_id:
            raise ValidationError("Invalid booking ID.")

        try:
            booking = await self.db.get(Booking, booking_id)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not load booking: {e}") from e

        if not booking:
            raise NotFoundError("Booking not found.")
        if booking.customer_id != customer_id:
            raise ForbiddenError("You are not authorized to cancel this booking.")

        booking.status = BookingStatus.CANCELLED.value
        booking.updated_at = utcnow()

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Could not cancel booking: {e}") from e

        logger.info("Booking %s cancelled by customer %s", booking_id, customer_id)

        if booking.customer_email:
            fire_and_forget(
                self.mail.send_cancellation_notice(
                    to_email=booking.customer_email,
                    customer_name=booking.customer_name,
                    booking_date=booking.booking_date,
                    service_type=booking.service_type,
                ),
                label=f"booking-cancellation:{booking.id}",
            )
        return booking

    def _to_view(self, booking: Booking) -> BookingView:
        return BookingView(
            booking_id=booking.id,
            booking_date=booking.booking_date,
            preferred_time=booking.preferred_time or "",
            address=booking.address or "",
            status=booking.status or "Unknown",
            final_price=float(booking.final_price) if booking.final_price else 0.0,
            service_type=booking.service_type or "Unknown",
            payment_status=booking.payment_status or "pending",
        )
