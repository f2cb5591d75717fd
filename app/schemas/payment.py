from datetime import date
from pydantic import BaseModel, Field


class PayableBooking(BaseModel):
    """A priced booking still awaiting payment."""
    booking_id: str
    service_type: str = "Unknown"
    address: str = ""
    booking_date: date
    time_slot: str = ""
    final_price: float = 0.0


class PaymentCreate(BaseModel):
    booking_id: str | None = None
    amount: float = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1, max_length=40)
    reference: str | None = None
    description: str | None = None
    service_type: str = ""


class MakePaymentView(BaseModel):
    pending_bookings: list[PayableBooking]
    payment_success: bool = False
    amount: float | None = None
    error: str | None = None
