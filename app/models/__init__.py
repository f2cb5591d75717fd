# app/models/__init__.py

from app.core.database import Base

from app.models.user import User
from app.models.booking import Booking
from app.models.notification import Notification
from app.models.payment import Payment
from app.models.support_ticket import SupportTicket

__all__ = [
    "Base",
    "User",
    "Booking",
    "Notification",
    "Payment",
    "SupportTicket",
]
