import logging

import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from app.core import session as portal_session
from app.core.database import get_db
from app.models import User
from app.models.enums import UserRole
from app.schemas.auth import LoginRequest, LoginResponse, MessageResponse
from app.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter()


# ============== Helper Functions ==============

def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against its hash"""
    return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))


# ============== Endpoints ==============

@router.get("/login", response_model=MessageResponse)
async def login_page():
    """Where unauthenticated customers are sent by the session guard."""
    return MessageResponse(message="Please log in to continue.", success=False)


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    http_request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Customer login.
    Verifies the password and starts a session carrying the customer's
    identity, role and cached display name.
    """
    result = await db.execute(
        select(User).where(User.email == request.email)
    )
    user = result.scalar_one_or_none()

    if not user or not user.password_hash:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if not verify_password(request.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    if user.role != UserRole.CUSTOMER.value:
        raise HTTPException(status_code=403, detail="This portal is for customers only")

    customer_name = await ProfileService(db).display_name(user.id)

    portal_session.clear(http_request.session)
    portal_session.establish(
        http_request.session,
        uid=user.id,
        email=user.email,
        email_verified=user.email_verified,
        customer_name=customer_name,
    )
    logger.info("Customer %s logged in", user.id)

    return LoginResponse(
        user_id=user.id,
        email=user.email,
        customer_name=customer_name,
        email_verified=user.email_verified,
    )
