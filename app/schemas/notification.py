from datetime import datetime
from pydantic import BaseModel


class NotificationView(BaseModel):
    id: str | None = None
    title: str = "Notification"
    message: str = ""
    type: str = "info"
    created_at: datetime
    is_read: bool = False


class MarkReadRequest(BaseModel):
    notification_id: str


class MarkReadResult(BaseModel):
    success: bool
    error: str | None = None
