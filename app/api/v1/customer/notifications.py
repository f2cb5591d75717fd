from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.session import CustomerContext, optional_customer, require_customer
from app.schemas.notification import MarkReadRequest, MarkReadResult, NotificationView
from app.services.notification_service import NotificationService

router = APIRouter()


@router.get("/notifications", response_model=list[NotificationView])
async def notifications(
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    return await NotificationService(db).recent(context.uid)


@router.post(
    "/mark-notification-read",
    response_model=MarkReadResult,
    response_model_exclude_none=True,
)
async def mark_notification_read(
    payload: MarkReadRequest,
    context: CustomerContext = Depends(optional_customer),
    db: AsyncSession = Depends(get_db)
):
    """JSON endpoint; never redirects, reports ``success: false`` instead."""
    if not context.is_authenticated_customer:
        return MarkReadResult(success=False)

    return await NotificationService(db).mark_read(context.uid, payload.notification_id)
