from datetime import date
from pydantic import BaseModel, Field


# ============== Booking Schemas ==============

class BookingCreate(BaseModel):
    """Book-cleaning form submitted by the customer."""
    booking_date: date
    booking_time: str = Field(..., min_length=1, max_length=40)
    address: str = Field(..., min_length=1)
    service_type: str = Field(..., min_length=1, max_length=80)
    estimated_price: float = Field(..., ge=0)
    bin_size: str = ""
    carpet_size: str = ""
    special_request: str = ""


class BookingOptions(BaseModel):
    """Optional per-service details; empty strings are not stored."""
    bin_size: str = ""
    carpet_size: str = ""
    special_request: str = ""


class BookingView(BaseModel):
    """Booking history row."""
    booking_id: str
    booking_date: date
    preferred_time: str = ""
    address: str = ""
    status: str = "Unknown"
    final_price: float = 0.0
    service_type: str = "Unknown"
    payment_status: str = "pending"


class BookCleaningView(BaseModel):
    """Book-cleaning page; re-rendered with ``error`` when the booking is rejected."""
    customer_name: str
    success: bool = False
    error: str | None = None
    booking_id: str | None = None
    booking_date: date | None = None
    address: str | None = None
    service_type: str | None = None


class BookingHistoryView(BaseModel):
    bookings: list[BookingView]
    messages: list[dict] = []


class CancelBookingRequest(BaseModel):
    booking_id: str = ""


class ActiveBookingResponse(BaseModel):
    has_active_booking: bool = Field(..., serialization_alias="hasActiveBooking")
    error: str | None = None
