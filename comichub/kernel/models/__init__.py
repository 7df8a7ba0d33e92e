"""
Kernel Data Models

SQLAlchemy models for accounts, catalog content, moderation and the audit trail.
"""

from comichub.kernel.models.base import Base, TimestampMixin, generate_uuid, utcnow, enum_value
from comichub.kernel.models.profile import Profile, UserRole, AppealStatus, STAFF_ROLES
from comichub.kernel.models.recommendation import (
    Recommendation,
    ComicType,
    PublicationStatus,
    ContentRating,
)
from comichub.kernel.models.review import Review
from comichub.kernel.models.report import Report, ReportStatus, ReportedEntity
from comichub.kernel.models.engagement import Vote, VoteType, Save
from comichub.kernel.models.news import News, NewsCategory
from comichub.kernel.models.notification import Notification
from comichub.kernel.models.activity_log import ActivityLog, AuditEntityType

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "generate_uuid",
    "utcnow",
    "enum_value",
    # Accounts
    "Profile",
    "UserRole",
    "AppealStatus",
    "STAFF_ROLES",
    # Catalog
    "Recommendation",
    "ComicType",
    "PublicationStatus",
    "ContentRating",
    "Review",
    "Vote",
    "VoteType",
    "Save",
    "News",
    "NewsCategory",
    # Moderation
    "Report",
    "ReportStatus",
    "ReportedEntity",
    "Notification",
    "ActivityLog",
    "AuditEntityType",
]
