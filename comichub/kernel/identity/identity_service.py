"""
Identity service: registration, authentication and profile lookup.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.errors import ValidationError
from comichub.kernel.identity.jwt import TokenManager
from comichub.kernel.identity.password import hash_password, verify_password
from comichub.kernel.models.base import enum_value
from comichub.kernel.models.profile import Profile, UserRole
from comichub.logging_config import get_logger

logger = get_logger(__name__)


class IdentityService:
    """
    Account identity operations.

    Registration and login stand in for the external identity provider;
    everything downstream only sees the resolved Profile.
    """

    def __init__(self, session: AsyncSession, token_manager: Optional[TokenManager] = None):
        self.session = session
        self.token_manager = token_manager or TokenManager()

    async def register_user(
        self,
        email: str,
        password: str,
        username: str,
        display_name: Optional[str] = None,
    ) -> Profile:
        """
        Create a new account with role 'user'.

        Raises:
            ValidationError: If the email or username is already taken
        """
        if await self.get_user_by_email(email):
            raise ValidationError("Email already registered")
        if await self.get_user_by_username(username):
            raise ValidationError("Username already taken")

        profile = Profile(
            email=email.lower().strip(),
            password_hash=hash_password(password),
            username=username.strip(),
            display_name=display_name,
            role=UserRole.USER,
        )
        self.session.add(profile)
        await self.session.flush()

        logger.info("Account registered", extra={"profile_id": str(profile.id)})
        return profile

    async def authenticate(self, email: str, password: str) -> Optional[tuple[Profile, str, int]]:
        """
        Check credentials and issue an access token.

        Banned accounts can still log in so they can read notifications
        and submit a ban appeal.

        Returns:
            (profile, access_token, expires_in_seconds) or None on bad credentials
        """
        profile = await self.get_user_by_email(email)
        if not profile or not verify_password(password, profile.password_hash):
            return None

        token, expires_at = self.token_manager.create_access_token(
            user_id=profile.id,
            username=profile.username,
            role=enum_value(profile.role),
        )
        expires_in = int((expires_at - datetime.now(timezone.utc)).total_seconds())
        return profile, token, expires_in

    async def get_user_by_id(self, user_id: uuid.UUID) -> Optional[Profile]:
        result = await self.session.execute(select(Profile).where(Profile.id == user_id))
        return result.scalar_one_or_none()

    async def get_user_by_email(self, email: str) -> Optional[Profile]:
        result = await self.session.execute(
            select(Profile).where(Profile.email == email.lower().strip())
        )
        return result.scalar_one_or_none()

    async def get_user_by_username(self, username: str) -> Optional[Profile]:
        result = await self.session.execute(
            select(Profile).where(Profile.username == username.strip())
        )
        return result.scalar_one_or_none()
