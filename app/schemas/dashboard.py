from pydantic import BaseModel

from app.schemas.notification import NotificationView


class CustomerStats(BaseModel):
    """Booking counts shown on the customer dashboard."""
    total_bookings: int = 0
    scheduled_count: int = 0
    completed_count: int = 0
    pending_count: int = 0
    in_progress_count: int = 0


class DashboardView(BaseModel):
    user_id: str
    user_email: str | None
    email_verified: bool
    customer_name: str
    stats: CustomerStats
    notifications: list[NotificationView]
