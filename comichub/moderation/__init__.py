"""Moderation workflow, action vocabularies and the appeal sub-flow."""

from comichub.moderation.actions import (
    AccountAction,
    EntityKind,
    ModerationPayload,
    RecommendationAction,
    ReportAction,
    ReviewAction,
    parse_action,
)
from comichub.moderation.appeal_service import AppealKind, AppealService
from comichub.moderation.moderation_service import (
    ModerationResult,
    ModerationService,
    require_staff,
)

__all__ = [
    "AccountAction",
    "AppealKind",
    "AppealService",
    "EntityKind",
    "ModerationPayload",
    "ModerationResult",
    "ModerationService",
    "RecommendationAction",
    "ReportAction",
    "ReviewAction",
    "parse_action",
    "require_staff",
]
