"""
Report and appeal submission schemas.
"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from comichub.schemas.moderation import ReportResponse


class ReportCreate(BaseModel):
    entity_type: str
    entity_id: uuid.UUID
    reason: str = Field(..., max_length=200)
    details: Optional[str] = Field(None, max_length=2000)


class ReportCreatedResponse(BaseModel):
    report: ReportResponse


class AppealRequest(BaseModel):
    """
    Appeal submission.

    `appeal_text` is optional here; a missing or blank text is a 400 from
    the service.
    """

    type: str
    target_id: Optional[uuid.UUID] = None
    appeal_text: Optional[str] = None
