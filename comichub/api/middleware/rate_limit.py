"""
Fixed-window rate limiting per IP (auth endpoints) and per user (everything else).
"""

import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request, Response, status
from jose import JWTError, jwt
from starlette.middleware.base import BaseHTTPMiddleware

from comichub.config import get_settings

WINDOW_SECONDS = 60


def _get_client_ip(request: Request) -> str:
    """Get client IP from request (X-Forwarded-For or direct)."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def _get_user_id_from_jwt(request: Request) -> Optional[str]:
    """User id from a Bearer token, if it decodes. Authorization itself happens later."""
    auth = request.headers.get("authorization")
    if not auth or not auth.lower().startswith("bearer "):
        return None
    token = auth[7:].strip()
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
    sub = payload.get("sub")
    return str(sub) if sub else None


class InMemoryRateLimitStore:
    """Fixed-window in-memory store. Key -> (count, window_start_ts)."""

    def __init__(self):
        self._data: Dict[str, Tuple[int, float]] = {}

    def check_and_incr(self, scope: str, identifier: str, limit: int, window_seconds: int) -> bool:
        """True if under limit (and counts the hit), False if over limit."""
        key = f"{scope}:{identifier}"
        now = time.monotonic()
        count, start = self._data.get(key, (0, now))
        if now - start >= window_seconds:
            count, start = 0, now
        if count >= limit:
            return False
        self._data[key] = (count + 1, start)
        return True

    def cleanup_old(self, max_age_seconds: int = 3600) -> None:
        now = time.monotonic()
        stale = [k for k, (_, start) in self._data.items() if now - start > max_age_seconds]
        for k in stale:
            self._data.pop(k, None)


# Single-process store
_store: Optional[InMemoryRateLimitStore] = None


def get_store() -> InMemoryRateLimitStore:
    global _store
    if _store is None:
        _store = InMemoryRateLimitStore()
    return _store


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Rate limit by scope:
    - auth: POST {api_prefix}/auth/* -> per IP
    - api: other {api_prefix} routes -> per user (or IP)
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        settings = get_settings()
        if not settings.rate_limit_enabled:
            return await call_next(request)

        path = request.url.path or ""
        if not path.startswith(settings.api_prefix):
            return await call_next(request)

        store = get_store()
        store.cleanup_old(max_age_seconds=7200)

        if path.startswith(f"{settings.api_prefix}/auth") and request.method == "POST":
            scope = "auth"
            limit = settings.rate_limit_auth_per_minute
            identifier = _get_client_ip(request)
        else:
            scope = "api"
            limit = settings.rate_limit_api_per_minute
            identifier = _get_user_id_from_jwt(request) or _get_client_ip(request)

        if not store.check_and_incr(scope, identifier, limit, WINDOW_SECONDS):
            return Response(
                content='{"detail":"Too many requests. Please try again later."}',
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                media_type="application/json",
            )
        return await call_next(request)
