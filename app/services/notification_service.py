import logging
from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select

from app.core.config import settings
from app.core.database import utcnow
from app.core.errors import StoreError
from app.models import Notification
from app.models.enums import NotificationType
from app.schemas.notification import MarkReadResult, NotificationView

logger = logging.getLogger(__name__)


def sample_notifications() -> list[NotificationView]:
    """Static content shown when the notifications collection can't be read."""
    now = utcnow()
    return [
        NotificationView(
            title=f"Welcome to {settings.APP_NAME}!",
            message="Thank you for choosing our waste management services.",
            type=NotificationType.SUCCESS.value,
            created_at=now - timedelta(hours=1),
        ),
        NotificationView(
            title="Quick Tip",
            message="Book your cleaning in advance for better slot availability.",
            type=NotificationType.INFO.value,
            created_at=now - timedelta(hours=3),
        ),
    ]


class NotificationService:
    """Reads, creates and acknowledges customer notifications."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def recent(self, customer_id: str, limit: int | None = None) -> list[NotificationView]:
        """Newest notifications first, at most ``limit``; sample content if the store fails."""
        if limit is None:
            limit = settings.NOTIFICATION_LIMIT
        try:
            result = await self.db.execute(
                select(Notification)
                .where(Notification.customer_id == customer_id)
                .order_by(Notification.created_at.desc())
                .limit(limit)
            )
            notifications = result.scalars().all()
        except SQLAlchemyError as e:
            logger.warning("Notifications unavailable for %s, showing samples: %s", customer_id, e)
            await self.db.rollback()
            return sample_notifications()

        return [
            NotificationView(
                id=n.id,
                title=n.title or "Notification",
                message=n.message or "",
                type=n.type or NotificationType.INFO.value,
                created_at=n.created_at or utcnow(),
                is_read=bool(n.is_read),
            )
            for n in notifications
        ]

    async def mark_read(self, customer_id: str, notification_id: str) -> MarkReadResult:
        """Flag a notification as read. Reports failure instead of raising."""
        try:
            result = await self.db.execute(
                select(Notification).where(
                    Notification.id == notification_id,
                    Notification.customer_id == customer_id,
                )
            )
            notification = result.scalar_one_or_none()
            if not notification:
                return MarkReadResult(success=False, error="Notification not found")

            notification.is_read = True
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to mark notification %s read: %s", notification_id, e)
            return MarkReadResult(success=False, error=str(e))

        return MarkReadResult(success=True)

    async def notify(
        self,
        customer_id: str,
        title: str,
        message: str,
        type: NotificationType = NotificationType.INFO,
    ) -> Notification:
        notification = Notification(
            customer_id=customer_id,
            title=title,
            message=message,
            type=type.value,
            is_read=False,
        )
        self.db.add(notification)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Could not save notification: {e}") from e
        return notification
