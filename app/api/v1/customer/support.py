from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import session as portal_session
from app.core.database import get_db
from app.core.errors import PortalError
from app.core.session import CustomerContext, require_customer
from app.schemas.support import SupportPage, SupportRequest
from app.services.profile_service import ProfileService
from app.services.support_service import SupportService

router = APIRouter()

SUPPORT_PATH = "/api/v1/customer/support"


@router.get("/support", response_model=SupportPage)
async def support(
    request: Request,
    context: CustomerContext = Depends(require_customer)
):
    return SupportPage(messages=portal_session.pop_flashes(request.session))


@router.post("/submit-support")
async def submit_support(
    payload: SupportRequest,
    request: Request,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    customer_name = await ProfileService(db).display_name(context.uid)

    try:
        await SupportService(db).submit(
            customer_id=context.uid,
            customer_name=customer_name,
            subject=payload.subject,
            message=payload.message,
            priority=payload.priority,
        )
    except PortalError as e:
        portal_session.flash(request.session, "error", f"Error submitting support ticket: {e.message}")
    else:
        portal_session.flash(
            request.session,
            "success",
            "Support ticket submitted successfully! We'll get back to you soon.",
        )

    return RedirectResponse(SUPPORT_PATH, status_code=303)
