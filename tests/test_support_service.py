from sqlalchemy import select

from app.models import Notification, SupportTicket
from app.models.enums import TicketPriority
from app.services.support_service import SupportService
from tests.conftest import CUSTOMER_ID


async def test_submit_creates_ticket_and_notification(db):
    ticket = await SupportService(db).submit(
        customer_id=CUSTOMER_ID,
        customer_name="Jane Doe",
        subject="Missed pickup",
        message="The truck did not come on Tuesday.",
        priority=TicketPriority.HIGH,
    )

    stored = await db.get(SupportTicket, ticket.id)
    assert stored.status == "open"
    assert stored.priority == "high"
    assert stored.customer_name == "Jane Doe"

    notes = (await db.execute(select(Notification))).scalars().all()
    assert len(notes) == 1
    assert notes[0].customer_id == CUSTOMER_ID
    assert notes[0].title == "Support Ticket Created"
    assert notes[0].message == "We've received your support request: Missed pickup"
    assert notes[0].type == "info"
    assert notes[0].is_read is False


async def test_ticket_survives_notification_failure(engine, db):
    async with engine.begin() as conn:
        await conn.run_sync(Notification.__table__.drop)

    ticket = await SupportService(db).submit(
        customer_id=CUSTOMER_ID,
        customer_name="Jane Doe",
        subject="Billing",
        message="Charged twice.",
    )

    stored = await db.get(SupportTicket, ticket.id)
    assert stored is not None
    assert stored.priority == "medium"
    assert ticket.subject == "Billing"
