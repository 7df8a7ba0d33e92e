"""
JWT access tokens for bearer authentication.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from comichub.config import get_settings


class AccessTokenPayload(BaseModel):
    """Decoded access token claims."""

    sub: str  # Profile ID
    username: str
    role: str
    exp: datetime
    iat: datetime
    jti: str


class TokenManager:
    """Creates and verifies HS256 access tokens."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
    ):
        settings = get_settings()
        self.secret_key = secret_key or settings.secret_key
        self.algorithm = algorithm or settings.algorithm
        self.access_token_expire_minutes = (
            access_token_expire_minutes or settings.access_token_expire_minutes
        )

    def create_access_token(
        self,
        user_id: uuid.UUID,
        username: str,
        role: str,
        expires_delta: Optional[timedelta] = None,
    ) -> tuple[str, datetime]:
        """
        Create a signed access token.

        Returns:
            Tuple of (token, expiration_datetime)
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=self.access_token_expire_minutes))
        payload = {
            "sub": str(user_id),
            "username": username,
            "role": role,
            "exp": expire,
            "iat": now,
            "jti": str(uuid.uuid4()),
            "type": "access",
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return token, expire

    def verify_access_token(self, token: str) -> Optional[AccessTokenPayload]:
        """Decode a token; None if it is invalid, expired or not an access token."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            return None

        if payload.get("type") != "access":
            return None

        return AccessTokenPayload(
            sub=payload["sub"],
            username=payload["username"],
            role=payload["role"],
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            jti=payload["jti"],
        )


_token_manager: Optional[TokenManager] = None


def get_token_manager() -> TokenManager:
    """Get or create the default token manager."""
    global _token_manager
    if _token_manager is None:
        _token_manager = TokenManager()
    return _token_manager


def create_access_token(
    user_id: uuid.UUID,
    username: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> tuple[str, datetime]:
    return get_token_manager().create_access_token(user_id, username, role, expires_delta)


def verify_access_token(token: str) -> Optional[AccessTokenPayload]:
    return get_token_manager().verify_access_token(token)
