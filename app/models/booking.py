from datetime import date, datetime
from decimal import Decimal
from sqlalchemy import String, Text, Date, DateTime, Numeric, Boolean, Index, text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, new_id, utcnow

_ACTIVE_STATUS_CLAUSE = text("status IN ('pending', 'approved', 'assigned')")


class Booking(Base):
    """A cleaning-service booking. Status and final price are set by the back office."""
    __tablename__ = "bookings"
    __table_args__ = (
        # Closes the check-then-insert race: one active booking per customer per day.
        Index(
            "uq_bookings_active_customer_date",
            "customer_id",
            "booking_date",
            unique=True,
            postgresql_where=_ACTIVE_STATUS_CLAUSE,
            sqlite_where=_ACTIVE_STATUS_CLAUSE,
        ),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_id)
    customer_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    booking_date: Mapped[date] = mapped_column(Date, nullable=False)
    preferred_time: Mapped[str] = mapped_column(String(40), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    service_type: Mapped[str] = mapped_column(String(80), nullable=False)
    estimated_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    final_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0)
    is_price_set: Mapped[bool] = mapped_column(Boolean, default=False)
    payment_status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending")
    bin_size: Mapped[str | None] = mapped_column(String(40), nullable=True)
    carpet_size: Mapped[str | None] = mapped_column(String(40), nullable=True)
    special_request: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
