from pydantic import BaseModel, EmailStr, Field


# ============== Login Schemas ==============

class LoginRequest(BaseModel):
    """Customer login credentials."""
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginResponse(BaseModel):
    user_id: str
    email: str
    customer_name: str
    email_verified: bool


class MessageResponse(BaseModel):
    message: str
    success: bool = True
