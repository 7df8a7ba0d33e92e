"""
Closed moderation vocabularies, one enum per entity kind.

Action names arrive as free-form strings from the HTTP layer; parse_action()
turns them into enum members or raises ValidationError, so an unknown action
can never fall through to a default branch.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Type

from comichub.kernel.errors import ValidationError
from comichub.kernel.models.activity_log import AuditEntityType
from comichub.kernel.models.profile import AppealStatus, UserRole


class EntityKind(str, Enum):
    """Targets of a moderation action."""
    RECOMMENDATION = "recommendation"
    ACCOUNT = "account"
    REVIEW = "review"
    REPORT = "report"

    @property
    def audit_type(self) -> AuditEntityType:
        # Accounts are recorded as "user" in the activity log
        if self is EntityKind.ACCOUNT:
            return AuditEntityType.USER
        return AuditEntityType(self.value)


class RecommendationAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"
    FEATURE = "feature"
    UNFEATURE = "unfeature"
    RESOLVE_APPEAL = "resolve_appeal"
    EDIT = "edit"


class AccountAction(str, Enum):
    BAN = "ban"
    UNBAN = "unban"
    CHANGE_ROLE = "change_role"
    RESOLVE_APPEAL = "resolve_appeal"


class ReviewAction(str, Enum):
    APPROVE = "approve"
    HIDE = "hide"
    DELETE = "delete"


class ReportAction(str, Enum):
    RESOLVE = "resolve"
    DISMISS = "dismiss"


ACTIONS_BY_KIND = {
    EntityKind.RECOMMENDATION: RecommendationAction,
    EntityKind.ACCOUNT: AccountAction,
    EntityKind.REVIEW: ReviewAction,
    EntityKind.REPORT: ReportAction,
}

# (kind, action) pairs whose subject user gets a notification. Members of
# different vocabularies can share a value, so the kind is part of the key.
NOTIFYING_ACTIONS = frozenset({
    (EntityKind.RECOMMENDATION, RecommendationAction.APPROVE),
    (EntityKind.RECOMMENDATION, RecommendationAction.REJECT),
    (EntityKind.RECOMMENDATION, RecommendationAction.RESOLVE_APPEAL),
    (EntityKind.ACCOUNT, AccountAction.BAN),
    (EntityKind.ACCOUNT, AccountAction.UNBAN),
    (EntityKind.ACCOUNT, AccountAction.RESOLVE_APPEAL),
})

# Fields a moderator may overwrite with the "edit" action
EDITABLE_RECOMMENDATION_FIELDS = ("title", "description", "author", "artist")

RESOLVABLE_APPEAL_STATUSES = frozenset({AppealStatus.APPROVED, AppealStatus.REJECTED})


def parse_action(kind: EntityKind, action) -> Enum:
    """
    Resolve an action name against the vocabulary of an entity kind.

    Raises:
        ValidationError: If the action is missing or not valid for this kind
    """
    vocabulary: Type[Enum] = ACTIONS_BY_KIND[kind]
    if isinstance(action, vocabulary):
        return action
    try:
        return vocabulary(action)
    except ValueError:
        allowed = ", ".join(member.value for member in vocabulary)
        raise ValidationError(
            f"Invalid action {action!r} for {kind.value}; expected one of: {allowed}"
        )


@dataclass
class ModerationPayload:
    """Action-specific inputs. Which fields matter depends on the action."""

    reason: Optional[str] = None
    role: Optional[str] = None
    appeal_status: Optional[str] = None
    resolution_note: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    artist: Optional[str] = None

    def require_reason(self) -> str:
        reason = (self.reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required")
        return reason

    def require_appeal_status(self) -> AppealStatus:
        try:
            status = AppealStatus(self.appeal_status)
        except ValueError:
            status = None
        if status not in RESOLVABLE_APPEAL_STATUSES:
            raise ValidationError("appeal_status must be 'approved' or 'rejected'")
        return status

    def edited_fields(self) -> dict:
        return {
            name: getattr(self, name)
            for name in EDITABLE_RECOMMENDATION_FIELDS
            if getattr(self, name) is not None
        }


def audit_action_label(kind: EntityKind, action: Enum, payload: ModerationPayload) -> str:
    """
    Deterministic, human-readable audit description for an action.

    The label depends only on the action and the payload, never on the
    current state of the target.
    """
    if kind is EntityKind.RECOMMENDATION:
        if action is RecommendationAction.RESOLVE_APPEAL:
            return f"{payload.require_appeal_status().value} appeal for recommendation"
        return {
            RecommendationAction.APPROVE: "approved recommendation",
            RecommendationAction.REJECT: "rejected recommendation",
            RecommendationAction.FEATURE: "featured recommendation",
            RecommendationAction.UNFEATURE: "unfeatured recommendation",
            RecommendationAction.EDIT: "edited recommendation",
        }[action]
    if kind is EntityKind.ACCOUNT:
        if action is AccountAction.CHANGE_ROLE:
            return f"changed user role to {UserRole(payload.role).value}"
        if action is AccountAction.RESOLVE_APPEAL:
            return f"{payload.require_appeal_status().value} ban appeal"
        return {
            AccountAction.BAN: "banned user",
            AccountAction.UNBAN: "unbanned user",
        }[action]
    if kind is EntityKind.REVIEW:
        return {
            ReviewAction.APPROVE: "approved review",
            ReviewAction.HIDE: "hidden review",
            ReviewAction.DELETE: "deleted review",
        }[action]
    return {
        ReportAction.RESOLVE: "resolved report",
        ReportAction.DISMISS: "dismissed report",
    }[action]
