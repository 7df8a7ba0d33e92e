"""
Caller-scoped endpoints: saved list, reports, appeals and notifications.
"""

from fastapi import APIRouter, status

from comichub.api.deps import ActiveUser, CurrentUser, DbSession
from comichub.catalog.engagement_service import EngagementService
from comichub.catalog.report_service import ReportService
from comichub.config import get_settings
from comichub.kernel.notifications.notification_service import NotificationService
from comichub.moderation.appeal_service import AppealService
from comichub.schemas.common import SuccessResponse
from comichub.schemas.moderation import ReportResponse
from comichub.schemas.notification import (
    MarkReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from comichub.schemas.recommendation import RecommendationCollection, RecommendationResponse
from comichub.schemas.report import AppealRequest, ReportCreate, ReportCreatedResponse

router = APIRouter()
settings = get_settings()


@router.get("/saves", response_model=RecommendationCollection, tags=["Recommendations"])
async def list_saves(user: CurrentUser, db: DbSession):
    items = await EngagementService(db).list_saved(user)
    return RecommendationCollection(
        recommendations=[RecommendationResponse.model_validate(r) for r in items]
    )


@router.post(
    "/reports",
    response_model=ReportCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Reports"],
)
async def create_report(data: ReportCreate, user: ActiveUser, db: DbSession):
    report = await ReportService(db).create(
        user,
        entity_type=data.entity_type,
        entity_id=data.entity_id,
        reason=data.reason,
        details=data.details,
    )
    return ReportCreatedResponse(report=ReportResponse.model_validate(report))


@router.post("/appeals", response_model=SuccessResponse, tags=["Appeals"])
async def submit_appeal(data: AppealRequest, user: CurrentUser, db: DbSession):
    """Appeal a rejected recommendation or one's own ban. Banned accounts may call this."""
    await AppealService(db).submit(
        user,
        kind=data.type,
        target_id=data.target_id,
        appeal_text=data.appeal_text,
    )
    return SuccessResponse()


@router.get("/notifications", response_model=NotificationListResponse, tags=["Notifications"])
async def list_notifications(user: CurrentUser, db: DbSession):
    items = await NotificationService(db).list_for_user(user.id, limit=settings.notifications_limit)
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in items],
        unread_count=sum(1 for n in items if not n.is_read),
    )


@router.patch("/notifications", response_model=MarkReadResponse, tags=["Notifications"])
async def mark_notifications_read(user: CurrentUser, db: DbSession):
    updated = await NotificationService(db).mark_all_read(user.id)
    return MarkReadResponse(updated=updated)
