import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StoreError
from app.models import SupportTicket
from app.models.enums import NotificationType, TicketPriority, TicketStatus
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


class SupportService:
    """Support ticket intake."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(
        self,
        customer_id: str,
        customer_name: str,
        subject: str,
        message: str,
        priority: TicketPriority = TicketPriority.MEDIUM,
    ) -> SupportTicket:
        """
        Save an open ticket, then tell the customer it was received.

        The two writes are independent: if the notification fails the ticket
        stays saved and the failure is only logged.
        """
        ticket = SupportTicket(
            customer_id=customer_id,
            customer_name=customer_name,
            subject=subject,
            message=message,
            priority=priority.value,
            status=TicketStatus.OPEN.value,
        )
        self.db.add(ticket)
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Could not save support ticket: {e}") from e

        ticket_id = ticket.id
        # Detached so a rolled-back notification write cannot expire it.
        self.db.expunge(ticket)
        logger.info("Support ticket %s opened by customer %s", ticket_id, customer_id)

        try:
            await NotificationService(self.db).notify(
                customer_id=customer_id,
                title="Support Ticket Created",
                message=f"We've received your support request: {subject}",
                type=NotificationType.INFO,
            )
        except StoreError as e:
            logger.error("Ticket %s saved but notification failed: %s", ticket_id, e)

        return ticket
