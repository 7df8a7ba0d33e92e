"""
Domain error taxonomy.

Services raise these; the HTTP layer maps them to status codes through the
exception handler registered in main.py.
"""

from typing import Optional


class ComicHubError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_detail: str = "Internal server error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthorized(ComicHubError):
    """No authenticated actor."""

    status_code = 401
    default_detail = "Unauthorized"


class Forbidden(ComicHubError):
    """Authenticated, but not allowed to act on this resource."""

    status_code = 403
    default_detail = "Forbidden"


class ValidationError(ComicHubError):
    """A required field is missing or malformed, or the action is unknown."""

    status_code = 400
    default_detail = "Validation failed"


class NotFound(ComicHubError):
    status_code = 404
    default_detail = "Not found"


class ConflictError(ComicHubError):
    """The target is not in a state that allows the requested transition."""

    status_code = 409
    default_detail = "Conflict"


class UpstreamFailure(ComicHubError):
    """The entity store was unreachable or rejected the write."""

    status_code = 500
    default_detail = "Failed to update"
