"""
Pydantic schemas for API request/response validation.
"""

from comichub.schemas.auth import (
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    TokenResponse,
)
from comichub.schemas.common import HealthResponse, SuccessResponse
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
from comichub.schemas.news import NewsCreate, NewsEnvelope, NewsListResponse, NewsResponse, NewsUpdate
from comichub.schemas.notification import (
    MarkReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from comichub.schemas.recommendation import (
    RecommendationCreate,
    RecommendationEnvelope,
    RecommendationListResponse,
    RecommendationResponse,
    RecommendationCollection,
    SaveResponse,
    VoteRequest,
    VoteResponse,
)
from comichub.schemas.report import AppealRequest, ReportCreate, ReportCreatedResponse
from comichub.schemas.review import (
    ReviewCreate,
    ReviewEnvelope,
    ReviewListResponse,
    ReviewResponse,
    ReviewUpdate,
)

__all__ = [
    "ActivityLogListResponse",
    "ActivityLogResponse",
    "AdminRecommendationListResponse",
    "AdminReviewEnvelope",
    "AdminUserListResponse",
    "AdminUserResponse",
    "AppealRequest",
    "HealthResponse",
    "LoginRequest",
    "MarkReadResponse",
    "ModerationRequest",
    "NewsCreate",
    "NewsEnvelope",
    "NewsListResponse",
    "NewsResponse",
    "NewsUpdate",
    "NotificationListResponse",
    "NotificationResponse",
    "ProfileResponse",
    "RecommendationCreate",
    "RecommendationEnvelope",
    "RecommendationListResponse",
    "RecommendationResponse",
    "RegisterRequest",
    "ReportCreate",
    "ReportCreatedResponse",
    "ReportEnvelope",
    "ReportListResponse",
    "ReportModerationRequest",
    "ReportResponse",
    "ReviewCreate",
    "ReviewEnvelope",
    "ReviewListResponse",
    "ReviewModerationRequest",
    "ReviewResponse",
    "ReviewUpdate",
    "RecommendationCollection",
    "SaveResponse",
    "SuccessResponse",
    "TokenResponse",
    "UserEnvelope",
    "VoteRequest",
    "VoteResponse",
]
