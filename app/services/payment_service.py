import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select

from app.core.database import utcnow
from app.core.errors import ForbiddenError, NotFoundError, StoreError
from app.models import Booking, Payment
from app.models.enums import PAYABLE_BOOKING_STATUSES, PaymentRecordStatus, PaymentStatus
from app.schemas.payment import PayableBooking, PaymentCreate
from app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

UNKNOWN_CUSTOMER = "Unknown Customer"


class PaymentService:
    """
    Records customer payments against priced bookings.

    Handles:
    - Listing bookings that are priced, approved/assigned and still unpaid
    - Writing the payment record and flipping the booking to paid
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_payable(self, customer_id: str) -> list[PayableBooking]:
        try:
            result = await self.db.execute(
                select(Booking).where(
                    Booking.customer_id == customer_id,
                    Booking.is_price_set.is_(True),
                    Booking.payment_status == PaymentStatus.PENDING.value,
                    Booking.status.in_(PAYABLE_BOOKING_STATUSES),
                )
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Could not load payable bookings: {e}") from e

        return [
            PayableBooking(
                booking_id=b.id,
                service_type=b.service_type or "Unknown",
                address=b.address or "",
                booking_date=b.booking_date,
                time_slot=b.preferred_time or "",
                final_price=float(b.final_price) if b.final_price else 0.0,
            )
            for b in result.scalars().all()
        ]

    async def record_payment(self, customer_id: str, payment: PaymentCreate) -> Payment:
        """
        Insert one payment and, when it is for a booking, mark that booking paid.

        Both writes commit together. The customer's display name is resolved
        first; a failed lookup falls back to "Unknown Customer".
        """
        customer_name = await ProfileService(self.db).display_name(customer_id, fallback=UNKNOWN_CUSTOMER)

        record = Payment(
            customer_id=customer_id,
            customer_name=customer_name,
            amount=payment.amount,
            method=payment.payment_method,
            reference=payment.reference or "",
            description=payment.description or f"Payment for {payment.service_type} cleaning",
            status=PaymentRecordStatus.COMPLETED.value,
            payment_date=utcnow(),
        )

        try:
            if payment.booking_id:
                booking = await self.db.get(Booking, payment.booking_id)
                if not booking:
                    raise NotFoundError("Booking not found.")
                if booking.customer_id != customer_id:
                    raise ForbiddenError("You are not authorized to pay for this booking.")

                record.booking_id = booking.id
                booking.payment_status = PaymentStatus.PAID.value
                booking.updated_at = utcnow()

            self.db.add(record)
            await self.db.commit()
        except (NotFoundError, ForbiddenError):
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(str(e)) from e

        logger.info(
            "Payment %s of %.2f recorded for customer %s (booking %s)",
            record.id, payment.amount, customer_id, payment.booking_id or "-",
        )
        return record
