from datetime import date

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import session as portal_session
from app.core.database import get_db
from app.core.errors import ConflictError, PortalError
from app.core.session import CustomerContext, optional_customer, require_customer
from app.schemas.booking import (
    ActiveBookingResponse,
    BookCleaningView,
    BookingCreate,
    BookingHistoryView,
    BookingOptions,
    CancelBookingRequest,
)
from app.services.booking_service import BookingService
from app.services.mail_service import MailService, get_mail_service
from app.services.profile_service import ProfileService

router = APIRouter()

BOOKING_HISTORY_PATH = "/api/v1/customer/booking-history"


# ==================== BOOK CLEANING ====================

@router.get("/book-cleaning", response_model=BookCleaningView)
async def book_cleaning_page(
    request: Request,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    customer_name = context.customer_name
    if not customer_name:
        customer_name = await ProfileService(db).display_name(context.uid)
        portal_session.set_customer_name(request.session, customer_name)

    return BookCleaningView(customer_name=customer_name)


@router.post("/book-cleaning", response_model=BookCleaningView)
async def book_cleaning(
    payload: BookingCreate,
    response: Response,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
    mail: MailService = Depends(get_mail_service)
):
    """
    Create a pending booking.

    A customer may hold only one active (pending, approved or assigned)
    booking per date; a clash re-renders the form with the reason.
    """
    customer_name = context.customer_name or "Customer"
    service = BookingService(db, mail=mail)

    try:
        booking = await service.create_booking(
            customer_id=context.uid,
            customer_name=customer_name,
            booking_date=payload.booking_date,
            preferred_time=payload.booking_time,
            address=payload.address,
            service_type=payload.service_type,
            estimated_price=payload.estimated_price,
            options=BookingOptions(
                bin_size=payload.bin_size,
                carpet_size=payload.carpet_size,
                special_request=payload.special_request,
            ),
            customer_email=context.email,
        )
    except ConflictError as e:
        response.status_code = status.HTTP_409_CONFLICT
        return BookCleaningView(customer_name=customer_name, error=e.message)

    return BookCleaningView(
        customer_name=customer_name,
        success=True,
        booking_id=booking.id,
        booking_date=booking.booking_date,
        address=booking.address,
        service_type=booking.service_type,
    )


# ==================== BOOKING HISTORY ====================

@router.get("/booking-history", response_model=BookingHistoryView)
async def booking_history(
    request: Request,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    bookings = await BookingService(db).list_bookings(context.uid)
    return BookingHistoryView(
        bookings=bookings,
        messages=portal_session.pop_flashes(request.session),
    )


@router.post("/cancel-booking")
async def cancel_booking(
    payload: CancelBookingRequest,
    request: Request,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db),
    mail: MailService = Depends(get_mail_service)
):
    """Cancel a booking the customer owns, then return to the history page."""
    await BookingService(db, mail=mail).cancel_booking(context.uid, payload.booking_id)

    portal_session.flash(request.session, "success", "Your booking has been successfully cancelled.")
    return RedirectResponse(BOOKING_HISTORY_PATH, status_code=303)


# ==================== AVAILABILITY ====================

@router.get(
    "/check-active-booking",
    response_model=ActiveBookingResponse,
    response_model_exclude_none=True,
)
async def check_active_booking(
    raw_date: str = Query("", alias="date", description="Date in YYYY-MM-DD format"),
    context: CustomerContext = Depends(optional_customer),
    db: AsyncSession = Depends(get_db)
):
    """Whether the logged-in customer already has an active booking on ``date``."""
    if not context.uid:
        return ActiveBookingResponse(has_active_booking=False)

    try:
        booking_date = date.fromisoformat(raw_date)
    except ValueError:
        return ActiveBookingResponse(has_active_booking=False, error="Invalid date")

    try:
        active = await BookingService(db).has_active_booking(context.uid, booking_date)
    except PortalError as e:
        return ActiveBookingResponse(has_active_booking=False, error=e.message)

    return ActiveBookingResponse(has_active_booking=active)
