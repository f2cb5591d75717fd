from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core import session as portal_session
from app.core.database import get_db
from app.core.errors import PortalError
from app.core.session import CustomerContext, require_customer
from app.schemas.profile import ProfilePage, ProfileUpdate
from app.services.profile_service import ProfileService

router = APIRouter()

PROFILE_PATH = "/api/v1/customer/profile"


@router.get("/profile", response_model=ProfilePage)
async def profile(
    request: Request,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    return ProfilePage(
        profile=await ProfileService(db).get_profile(context.uid),
        messages=portal_session.pop_flashes(request.session),
    )


@router.post("/update-profile")
async def update_profile(
    payload: ProfileUpdate,
    request: Request,
    context: CustomerContext = Depends(require_customer),
    db: AsyncSession = Depends(get_db)
):
    """Save profile fields; the cached display name only changes on success."""
    try:
        await ProfileService(db).update_profile(context.uid, payload)
    except PortalError as e:
        portal_session.flash(request.session, "error", f"Error updating profile: {e.message}")
    else:
        portal_session.set_customer_name(request.session, f"{payload.first_name} {payload.last_name}")
        portal_session.flash(request.session, "success", "Profile updated successfully!")

    return RedirectResponse(PROFILE_PATH, status_code=303)
