"""
FastAPI dependencies for authentication, authorization, and database sessions.
"""

import uuid
from typing import Annotated, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.database import get_db
from comichub.kernel.identity.identity_service import IdentityService
from comichub.kernel.identity.jwt import verify_access_token
from comichub.kernel.models.profile import Profile


# Security scheme
security = HTTPBearer(auto_error=False)

DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: DbSession,
) -> Profile:
    """
    Get current authenticated user or raise 401.

    Banned accounts are still authenticated: they can read notifications
    and appeal their ban.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = verify_access_token(credentials.credentials)
    if not payload:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    identity_service = IdentityService(db)
    user = await identity_service.get_user_by_id(uuid.UUID(payload.sub))

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


CurrentUser = Annotated[Profile, Depends(get_current_user)]


async def require_active_user(user: CurrentUser) -> Profile:
    """Require an account that is not suspended."""
    if user.is_banned:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account is suspended",
        )
    return user


ActiveUser = Annotated[Profile, Depends(require_active_user)]


async def require_staff_user(user: CurrentUser) -> Profile:
    """Require a moderator or admin."""
    if not user.is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator or admin role required",
        )
    return user


StaffUser = Annotated[Profile, Depends(require_staff_user)]
