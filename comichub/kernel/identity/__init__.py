"""
Identity Core - authentication and account lookup.
"""

from comichub.kernel.identity.password import hash_password, verify_password
from comichub.kernel.identity.jwt import (
    TokenManager,
    AccessTokenPayload,
    create_access_token,
    verify_access_token,
)
from comichub.kernel.identity.identity_service import IdentityService

__all__ = [
    "hash_password",
    "verify_password",
    "TokenManager",
    "AccessTokenPayload",
    "create_access_token",
    "verify_access_token",
    "IdentityService",
]
