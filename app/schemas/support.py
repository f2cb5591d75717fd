from pydantic import BaseModel, Field

from app.models.enums import TicketPriority


class SupportRequest(BaseModel):
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    priority: TicketPriority = TicketPriority.MEDIUM


class SupportPage(BaseModel):
    messages: list[dict] = []
