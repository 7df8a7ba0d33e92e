"""
Staff moderation schemas: action requests, listings and the audit trail.
"""

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from comichub.kernel.models.profile import AppealStatus, UserRole
from comichub.kernel.models.report import ReportedEntity, ReportStatus
from comichub.moderation.actions import ModerationPayload
from comichub.schemas.recommendation import RecommendationResponse
from comichub.schemas.review import ReviewResponse


class ModerationRequest(BaseModel):
    """
    PATCH body for recommendation and account actions.

    `action` is validated against the closed vocabulary of the target kind
    by the service, so an unknown action is a 400, not a 422.
    """

    action: str
    reason: Optional[str] = None
    role: Optional[str] = None
    appeal_status: Optional[str] = None
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=10, max_length=2000)
    author: Optional[str] = Field(None, max_length=100)
    artist: Optional[str] = Field(None, max_length=100)

    def to_payload(self) -> ModerationPayload:
        return ModerationPayload(
            reason=self.reason,
            role=self.role,
            appeal_status=self.appeal_status,
            title=self.title,
            description=self.description,
            author=self.author,
            artist=self.artist,
        )


class ReviewModerationRequest(BaseModel):
    """Either `action` (approve|hide) or the older `is_approved` flag."""

    action: Optional[str] = None
    is_approved: Optional[bool] = None

    def resolved_action(self) -> Optional[str]:
        if self.action is not None:
            return self.action
        if self.is_approved is None:
            return None
        return "approve" if self.is_approved else "hide"


class ReportModerationRequest(BaseModel):
    """`status` is resolved|dismissed; `action` resolve|dismiss is accepted too."""

    status: Optional[str] = None
    action: Optional[str] = None
    resolution_note: Optional[str] = None

    def resolved_action(self) -> Optional[str]:
        if self.action is not None:
            return self.action
        return {"resolved": "resolve", "dismissed": "dismiss"}.get(self.status, self.status)


class AdminUserResponse(BaseModel):
    id: uuid.UUID
    email: str
    username: str
    display_name: Optional[str] = None
    role: UserRole
    is_banned: bool
    ban_reason: Optional[str] = None
    banned_at: Optional[datetime] = None
    banned_by: Optional[uuid.UUID] = None
    appeal_status: AppealStatus
    appeal_text: Optional[str] = None
    appeal_submitted_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ReportResponse(BaseModel):
    id: uuid.UUID
    reporter_id: uuid.UUID
    entity_type: ReportedEntity
    entity_id: uuid.UUID
    reason: str
    details: Optional[str] = None
    status: ReportStatus
    resolved_by: Optional[uuid.UUID] = None
    resolved_at: Optional[datetime] = None
    resolution_note: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AdminRecommendationListResponse(BaseModel):
    recommendations: List[RecommendationResponse]
    total: int
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        populate_by_name = True


class AdminUserListResponse(BaseModel):
    users: List[AdminUserResponse]
    total: int
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        populate_by_name = True


class ReportListResponse(BaseModel):
    reports: List[ReportResponse]
    total: int


class UserEnvelope(BaseModel):
    user: AdminUserResponse


class ReportEnvelope(BaseModel):
    report: ReportResponse


class AdminReviewEnvelope(BaseModel):
    review: ReviewResponse


class ActivityLogResponse(BaseModel):
    """One audit entry with the actor's username and target_* aliases."""

    id: int
    user_id: Optional[uuid.UUID] = None
    username: Optional[str] = None
    action: str
    entity_type: str
    entity_id: Optional[uuid.UUID] = None
    target_type: str
    target_id: Optional[uuid.UUID] = None
    target_label: str
    details: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime


class ActivityLogListResponse(BaseModel):
    logs: List[ActivityLogResponse]
    total: int
    has_more: bool = Field(False, alias="hasMore")

    class Config:
        populate_by_name = True
