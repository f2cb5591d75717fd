from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import session as portal_session
from app.core.database import get_db
from app.core.session import CustomerContext, LOGIN_PATH, require_customer
from app.schemas.dashboard import DashboardView
from app.services.notification_service import NotificationService
from app.services.profile_service import ProfileService
from app.services.stats_service import StatsService

router = APIRouter()


@router.get("/dashboard", response_model=DashboardView)
async def dashboard(
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    """Booking counts, latest notifications and who is logged in."""
    stats = await StatsService(db).compute_stats(context.uid)
    notifications = await NotificationService(db).recent(context.uid)
    customer_name = await ProfileService(db).display_name(context.uid)

    return DashboardView(
        user_id=context.uid,
        user_email=context.email,
        email_verified=context.email_verified,
        customer_name=customer_name,
        stats=stats,
        notifications=notifications,
    )


@router.post("/logout")
async def logout(request: Request):
    portal_session.clear(request.session)
    return RedirectResponse(LOGIN_PATH, status_code=303)
