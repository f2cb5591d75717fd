import logging
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import utcnow
from app.core.errors import NotFoundError, StoreError
from app.models import User
from app.schemas.profile import ProfileUpdate, ProfileView

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads and updates the customer's stored profile."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_profile(self, customer_id: str) -> ProfileView:
        """Stored profile fields; empty strings for anything missing."""
        user = await self._load(customer_id)
        if not user:
            return ProfileView()

        return ProfileView(
            first_name=user.first_name or "",
            last_name=user.last_name or "",
            email=user.email or "",
            phone=user.phone or "",
            address=user.address or "",
        )

    async def update_profile(self, customer_id: str, profile: ProfileUpdate) -> User:
        user = await self._load(customer_id)
        if not user:
            raise NotFoundError("User profile not found.")

        user.first_name = profile.first_name
        user.last_name = profile.last_name
        user.phone = profile.phone or ""
        user.address = profile.address or ""
        user.updated_at = utcnow()

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Could not update profile: {e}") from e

        logger.info("Profile updated for customer %s", customer_id)
        return user

    async def display_name(self, customer_id: str | None, fallback: str = "Customer") -> str:
        """
        Best display name for a customer.

        Tries "first last", then the legacy single ``name`` field, then
        ``fallback``. Lookup failures are logged and degrade to the fallback.
        """
        if not customer_id:
            return fallback

        try:
            user = await self._load(customer_id)
        except StoreError as e:
            logger.warning("Error getting customer name for %s: %s", customer_id, e)
            return fallback

        if not user:
            return fallback

        full_name = f"{user.first_name or ''} {user.last_name or ''}".strip()
        if full_name:
            return full_name
        if user.name:
            return user.name
        return fallback

    async def _load(self, customer_id: str) -> User | None:
        try:
            return await self.db.get(User, customer_id)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise StoreError(f"Could not load user: {e}") from e
