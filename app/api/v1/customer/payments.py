from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.errors import PortalError
from app.core.session import CustomerContext, require_customer
from app.schemas.payment import MakePaymentView, PaymentCreate
from app.services.payment_service import PaymentService

router = APIRouter()


@router.get("/make-payment", response_model=MakePaymentView)
async def make_payment_page(
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    """Priced bookings that are still waiting for payment."""
    pending = await PaymentService(db).list_payable(context.uid)
    return MakePaymentView(pending_bookings=pending)


@router.post("/make-payment", response_model=MakePaymentView)
async def make_payment(
    payload: PaymentCreate,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    """
    Record a payment and re-render the payable list.

    Failures are reported in ``error`` instead of failing the request.
    """
    service = PaymentService(db)
    view = MakePaymentView(pending_bookings=[])

    try:
        await service.record_payment(context.uid, payload)
        view.payment_success = True
        view.amount = payload.amount
    except PortalError as e:
        view.error = f"Payment failed: {e.message}"

    view.pending_bookings = await service.list_payable(context.uid)
    return view
