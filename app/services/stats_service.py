from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select

from app.core.errors import StoreError
from app.models import Booking
from app.schemas.dashboard import CustomerStats


class StatsService:
    """Dashboard booking counts for one customer."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def compute_stats(self, customer_id: str) -> CustomerStats:
        """
        Tally the customer's bookings by status.

        Every booking counts toward ``total_bookings``; statuses outside the
        known set (e.g. cancelled) add to no other counter.
        """
        try:
            result = await self.db.execute(
                select(Booking.status).where(Booking.customer_id == customer_id)
            )
        except SQLAlchemyError as e:
            raise StoreError(f"Could not load bookings: {e}") from e

        stats = CustomerStats()
        for raw_status in result.scalars():
            status = (raw_status or "").lower()

            if status == "completed":
                stats.completed_count += 1
            elif status == "pending":
                stats.pending_count += 1
            elif status in ("assigned", "in progress"):
                stats.in_progress_count += 1
            elif status == "approved":
                stats.scheduled_count += 1

            stats.total_bookings += 1

        return stats
