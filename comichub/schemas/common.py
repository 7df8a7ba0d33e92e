"""
Common schema types used across the API.
"""

from typing import Optional

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Standard success response."""

    success: bool = True
    message: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    database: str = "connected"
