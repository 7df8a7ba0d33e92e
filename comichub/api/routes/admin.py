"""
Staff moderation endpoints.

Every PATCH goes through ModerationService.apply, which writes the audit
entry and the notification in the request's unit of work.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Query

from comichub.api.deps import DbSession, StaffUser
from comichub.config import get_settings
from comichub.kernel.events.audit_log import AuditLog
from comichub.kernel.models.base import enum_value
from comichub.moderation.actions import EntityKind, ModerationPayload
from comichub.moderation.moderation_service import ModerationService
from comichub.schemas.common import SuccessResponse
from comichub.schemas.moderation import (
    ActivityLogListResponse,
    ActivityLogResponse,
    AdminRecommendationListResponse,
    AdminReviewEnvelope,
    AdminUserListResponse,
    AdminUserResponse,
    ModerationRequest,
    ReportEnvelope,
    ReportListResponse,
    ReportModerationRequest,
    ReportResponse,
    ReviewModerationRequest,
    UserEnvelope,
)
from comichub.schemas.recommendation import RecommendationEnvelope, RecommendationResponse
from comichub.schemas.review import ReviewResponse

router = APIRouter()
settings = get_settings()


@router.get("/recommendations", response_model=AdminRecommendationListResponse)
async def list_recommendations(
    user: StaffUser,
    db: DbSession,
    filter: str = Query("pending"),
    page: int = Query(1, ge=1),
):
    items, total, has_more = await ModerationService(db).list_recommendations(
        user, filter=filter, page=page, page_size=settings.recommendations_page_size
    )
    return AdminRecommendationListResponse(
        recommendations=[RecommendationResponse.model_validate(r) for r in items],
        total=total,
        has_more=has_more,
    )


@router.patch("/recommendations/{recommendation_id}", response_model=RecommendationEnvelope)
async def moderate_recommendation(
    recommendation_id: uuid.UUID,
    data: ModerationRequest,
    user: StaffUser,
    db: DbSession,
):
    result = await ModerationService(db).apply(
        user,
        EntityKind.RECOMMENDATION,
        recommendation_id,
        data.action,
        data.to_payload(),
    )
    return RecommendationEnvelope(
        recommendation=RecommendationResponse.model_validate(result.entity)
    )


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    user: StaffUser,
    db: DbSession,
    q: Optional[str] = Query(None),
    filter: str = Query("all"),
    page: int = Query(1, ge=1),
):
    items, total, has_more = await ModerationService(db).list_users(
        user, q=q, filter=filter, page=page, page_size=settings.users_page_size
    )
    return AdminUserListResponse(
        users=[AdminUserResponse.model_validate(p) for p in items],
        total=total,
        has_more=has_more,
    )


@router.patch("/users/{user_id}", response_model=UserEnvelope)
async def moderate_user(
    user_id: uuid.UUID,
    data: ModerationRequest,
    user: StaffUser,
    db: DbSession,
):
    result = await ModerationService(db).apply(
        user,
        EntityKind.ACCOUNT,
        user_id,
        data.action,
        data.to_payload(),
    )
    return UserEnvelope(user=AdminUserResponse.model_validate(result.entity))


@router.get("/reports", response_model=ReportListResponse)
async def list_reports(
    user: StaffUser,
    db: DbSession,
    filter: str = Query("pending"),
):
    reports, total = await ModerationService(db).list_reports(user, filter=filter)
    return ReportListResponse(
        reports=[ReportResponse.model_validate(r) for r in reports],
        total=total,
    )


@router.patch("/reports/{report_id}", response_model=ReportEnvelope)
async def moderate_report(
    report_id: uuid.UUID,
    data: ReportModerationRequest,
    user: StaffUser,
    db: DbSession,
):
    result = await ModerationService(db).apply(
        user,
        EntityKind.REPORT,
        report_id,
        data.resolved_action(),
        ModerationPayload(resolution_note=data.resolution_note),
    )
    return ReportEnvelope(report=ReportResponse.model_validate(result.entity))


@router.patch("/reviews/{review_id}", response_model=AdminReviewEnvelope)
async def moderate_review(
    review_id: uuid.UUID,
    data: ReviewModerationRequest,
    user: StaffUser,
    db: DbSession,
):
    result = await ModerationService(db).apply(
        user,
        EntityKind.REVIEW,
        review_id,
        data.resolved_action(),
    )
    return AdminReviewEnvelope(review=ReviewResponse.model_validate(result.entity))


@router.delete("/reviews/{review_id}", response_model=SuccessResponse)
async def delete_review(review_id: uuid.UUID, user: StaffUser, db: DbSession):
    await ModerationService(db).apply(user, EntityKind.REVIEW, review_id, "delete")
    return SuccessResponse()


@router.get("/logs", response_model=ActivityLogListResponse)
async def list_logs(
    user: StaffUser,
    db: DbSession,
    page: int = Query(1, ge=1),
):
    """The audit trail, newest first."""
    rows, total, has_more = await AuditLog(db).list_entries(
        page=page, page_size=settings.audit_log_page_size
    )
    logs = [
        ActivityLogResponse(
            id=entry.id,
            user_id=entry.user_id,
            username=username,
            action=entry.action,
            entity_type=enum_value(entry.entity_type),
            entity_id=entry.entity_id,
            target_type=enum_value(entry.entity_type),
            target_id=entry.entity_id,
            target_label=entry.target_label,
            details=entry.details or {},
            created_at=entry.created_at,
        )
        for entry, username in rows
    ]
    return ActivityLogListResponse(logs=logs, total=total, has_more=has_more)
