"""
Moderation workflow for recommendations, accounts, reviews and reports.

Every action runs as one unit of work on the request session:
mutate target -> flush -> append audit entry -> best-effort notification.
The request-scoped session commits all of it together or rolls all of it back.
"""

import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from comichub.catalog.counters import adjust_counters
from comichub.kernel.errors import (
    ConflictError,
    Forbidden,
    NotFound,
    Unauthorized,
    UpstreamFailure,
    ValidationError,
)
from comichub.kernel.events.audit_log import AuditLog
from comichub.kernel.models.activity_log import ActivityLog
from comichub.kernel.models.base import enum_value, utcnow
from comichub.kernel.models.profile import AppealStatus, Profile, UserRole
from comichub.kernel.models.recommendation import Recommendation
from comichub.kernel.models.report import Report, ReportStatus
from comichub.kernel.models.review import Review
from comichub.kernel.notifications.notification_service import NotificationService
from comichub.logging_config import get_logger
from comichub.moderation.actions import (
    NOTIFYING_ACTIONS,
    AccountAction,
    EntityKind,
    ModerationPayload,
    RecommendationAction,
    ReportAction,
    ReviewAction,
    audit_action_label,
    parse_action,
)

logger = get_logger(__name__)

RECOMMENDATION_FILTERS = ("pending", "approved", "rejected", "featured", "appeals")
USER_FILTERS = ("all", "banned", "admin", "moderator")


@dataclass
class ModerationResult:
    """Outcome of one applied moderation action."""

    kind: EntityKind
    action: Enum
    entity: Any
    audit_entry: ActivityLog
    deleted: bool = False


def require_staff(actor: Optional[Profile]) -> Profile:
    """
    Authority check run before any read or write.

    Raises:
        Unauthorized: No actor
        Forbidden: Actor is not a moderator or admin
    """
    if actor is None:
        raise Unauthorized()
    if not actor.is_staff:
        raise Forbidden("Moderator or admin role required")
    return actor


class ModerationService:
    """Apply staff moderation actions and serve the staff listing queries."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.audit_log = AuditLog(session)
        self.notifications = NotificationService(session)

    async def apply(
        self,
        actor: Optional[Profile],
        kind: EntityKind,
        entity_id: uuid.UUID,
        action,
        payload: Optional[ModerationPayload] = None,
    ) -> ModerationResult:
        """
        Apply one moderation action to one entity.

        Raises:
            Unauthorized, Forbidden: Actor check failed
            ValidationError: Unknown action or missing payload field
            NotFound: Target does not exist
            ConflictError: Target is not in a state that allows the action,
                or was modified concurrently
            UpstreamFailure: The write was rejected by the database
        """
        actor = require_staff(actor)
        kind = EntityKind(kind)
        action = parse_action(kind, action)
        payload = payload or ModerationPayload()

        handler = {
            EntityKind.RECOMMENDATION: self._apply_recommendation,
            EntityKind.ACCOUNT: self._apply_account,
            EntityKind.REVIEW: self._apply_review,
            EntityKind.REPORT: self._apply_report,
        }[kind]
        entity, target_label, details, deleted = await handler(actor, entity_id, action, payload)

        await self._flush()

        entry = await self.audit_log.append(
            actor_id=actor.id,
            action=audit_action_label(kind, action, payload),
            entity_type=kind.audit_type,
            entity_id=entity_id,
            target_label=target_label,
            details={"action": action.value, **details},
        )

        if (kind, action) in NOTIFYING_ACTIONS:
            await self._notify_subject(kind, action, entity, payload)

        logger.info(
            "Moderation action applied",
            extra={
                "actor_id": str(actor.id),
                "entity_kind": kind.value,
                "entity_id": str(entity_id),
                "action": action.value,
            },
        )
        return ModerationResult(
            kind=kind,
            action=action,
            entity=entity,
            audit_entry=entry,
            deleted=deleted,
        )

    # ------------------------------------------------------------------
    # Per-kind transitions. Each returns (entity, target_label, details, deleted)
    # ------------------------------------------------------------------

    async def _apply_recommendation(
        self,
        actor: Profile,
        entity_id: uuid.UUID,
        action: RecommendationAction,
        payload: ModerationPayload,
    ) -> Tuple[Recommendation, str, Dict[str, Any], bool]:
        details: Dict[str, Any] = {}
        if action is RecommendationAction.REJECT:
            details["reason"] = payload.require_reason()
        elif action is RecommendationAction.RESOLVE_APPEAL:
            details["appeal_status"] = payload.require_appeal_status()
        elif action is RecommendationAction.EDIT:
            details["fields"] = sorted(payload.edited_fields())

        rec = await self._load(Recommendation, entity_id, "Recommendation")
        now = utcnow()

        if action is RecommendationAction.APPROVE:
            rec.is_approved = True
            rec.rejection_reason = None
            rec.rejected_at = None
            rec.rejected_by = None
            if enum_value(rec.appeal_status) == AppealStatus.PENDING.value:
                rec.appeal_status = AppealStatus.APPROVED

        elif action is RecommendationAction.REJECT:
            rec.is_approved = False
            rec.is_featured = False
            rec.featured_at = None
            rec.featured_by = None
            rec.rejection_reason = details["reason"]
            rec.rejected_at = now
            rec.rejected_by = actor.id
            # A fresh rejection opens a fresh appeal cycle
            rec.appeal_status = AppealStatus.NONE
            rec.appeal_text = None
            rec.appeal_submitted_at = None

        elif action is RecommendationAction.FEATURE:
            if not rec.is_approved:
                raise ConflictError("Only approved recommendations can be featured")
            rec.is_featured = True
            rec.featured_at = now
            rec.featured_by = actor.id

        elif action is RecommendationAction.UNFEATURE:
            rec.is_featured = False
            rec.featured_at = None
            rec.featured_by = None

        elif action is RecommendationAction.RESOLVE_APPEAL:
            self._require_pending_appeal(rec.appeal_status)
            rec.appeal_status = details["appeal_status"]
            if details["appeal_status"] is AppealStatus.APPROVED:
                rec.is_approved = True
                rec.rejection_reason = None
                rec.rejected_at = None
                rec.rejected_by = None
            else:
                rec.is_approved = False

        elif action is RecommendationAction.EDIT:
            for name, value in payload.edited_fields().items():
                setattr(rec, name, value)

        return rec, rec.title or str(rec.id), details, False

    async def _apply_account(
        self,
        actor: Profile,
        entity_id: uuid.UUID,
        action: AccountAction,
        payload: ModerationPayload,
    ) -> Tuple[Profile, str, Dict[str, Any], bool]:
        details: Dict[str, Any] = {}
        if action is AccountAction.BAN:
            details["reason"] = payload.require_reason()
        elif action is AccountAction.CHANGE_ROLE:
            try:
                details["role"] = UserRole(payload.role)
            except ValueError:
                raise ValidationError("role must be one of: user, moderator, admin")
        elif action is AccountAction.RESOLVE_APPEAL:
            details["appeal_status"] = payload.require_appeal_status()

        target = await self._load(Profile, entity_id, "User")
        now = utcnow()

        if action is AccountAction.BAN:
            if target.id == actor.id:
                raise Forbidden("You cannot ban yourself")
            target.is_banned = True
            target.ban_reason = details["reason"]
            target.banned_at = now
            target.banned_by = actor.id
            # A fresh ban opens a fresh appeal cycle
            target.appeal_status = AppealStatus.NONE
            target.appeal_text = None
            target.appeal_submitted_at = None

        elif action is AccountAction.UNBAN:
            self._lift_ban(target)

        elif action is AccountAction.CHANGE_ROLE:
            new_role = details["role"]
            if target.id == actor.id:
                raise Forbidden("You cannot change your own role")
            if (
                enum_value(target.role) == UserRole.ADMIN.value
                and new_role is not UserRole.ADMIN
                and await self._admin_count() <= 1
            ):
                raise ConflictError("Cannot demote the last remaining admin")
            details["previous_role"] = enum_value(target.role)
            target.role = new_role

        elif action is AccountAction.RESOLVE_APPEAL:
            self._require_pending_appeal(target.appeal_status)
            if details["appeal_status"] is AppealStatus.APPROVED:
                self._lift_ban(target)
                target.appeal_status = AppealStatus.APPROVED
            else:
                target.appeal_status = AppealStatus.REJECTED
                target.is_banned = True

        return target, target.username or str(target.id), details, False

    async def _apply_review(
        self,
        actor: Profile,
        entity_id: uuid.UUID,
        action: ReviewAction,
        payload: ModerationPayload,
    ) -> Tuple[Review, str, Dict[str, Any], bool]:
        review = await self._load(Review, entity_id, "Review")
        details: Dict[str, Any] = {"recommendation_id": review.recommendation_id}

        if action is ReviewAction.DELETE:
            details["content_preview"] = (review.content or "")[:100]
            rec = await self.session.get(Recommendation, review.recommendation_id)
            await self.session.delete(review)
            if rec is not None and rec.review_count > 0:
                await adjust_counters(self.session, rec, review_count=-1)
            return review, str(review.id), details, True

        review.is_approved = action is ReviewAction.APPROVE
        return review, str(review.id), details, False

    async def _apply_report(
        self,
        actor: Profile,
        entity_id: uuid.UUID,
        action: ReportAction,
        payload: ModerationPayload,
    ) -> Tuple[Report, str, Dict[str, Any], bool]:
        report = await self._load(Report, entity_id, "Report")

        report.status = (
            ReportStatus.RESOLVED if action is ReportAction.RESOLVE else ReportStatus.DISMISSED
        )
        report.resolved_by = actor.id
        report.resolved_at = utcnow()
        report.resolution_note = payload.resolution_note

        details = {
            "resolution_note": payload.resolution_note,
            "reported_entity_type": enum_value(report.entity_type),
            "reported_entity_id": report.entity_id,
        }
        return report, str(report.id), details, False

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    async def _notify_subject(
        self,
        kind: EntityKind,
        action: Enum,
        entity: Any,
        payload: ModerationPayload,
    ) -> None:
        reason = payload.reason.strip() if payload.reason else None

        if kind is EntityKind.RECOMMENDATION:
            if action is RecommendationAction.APPROVE:
                title = f'Your recommendation "{entity.title}" has been approved!'
            elif action is RecommendationAction.REJECT:
                title = f'Your recommendation "{entity.title}" was rejected. Reason: {reason}'
            else:
                status = payload.require_appeal_status().value
                title = f'Your appeal for "{entity.title}" has been {status}.'
            await self.notifications.notify(
                user_id=entity.user_id,
                type=f"recommendation_{action.value}",
                title=title,
                data={"recommendation_id": str(entity.id)},
            )
            return

        if action is AccountAction.BAN:
            title = f"Your account has been suspended. Reason: {reason}"
        elif action is AccountAction.UNBAN:
            title = "Your account suspension has been lifted."
        else:
            title = f"Your ban appeal has been {payload.require_appeal_status().value}."
        await self.notifications.notify(
            user_id=entity.id,
            type=f"account_{action.value}",
            title=title,
            data={"reason": reason},
        )

    # ------------------------------------------------------------------
    # Staff listings
    # ------------------------------------------------------------------

    async def list_recommendations(
        self,
        actor: Optional[Profile],
        filter: str = "pending",
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Recommendation], int, bool]:
        """Recommendations by moderation filter, newest first."""
        require_staff(actor)
        if filter not in RECOMMENDATION_FILTERS:
            raise ValidationError(
                f"filter must be one of: {', '.join(RECOMMENDATION_FILTERS)}"
            )

        conditions = {
            "pending": [
                Recommendation.is_approved.is_(False),
                Recommendation.rejection_reason.is_(None),
            ],
            "approved": [Recommendation.is_approved.is_(True)],
            "rejected": [Recommendation.rejection_reason.is_not(None)],
            "featured": [Recommendation.is_featured.is_(True)],
            "appeals": [Recommendation.appeal_status == AppealStatus.PENDING.value],
        }[filter]

        return await self._paginate(
            select(Recommendation).where(*conditions),
            Recommendation.created_at,
            page,
            page_size,
        )

    async def list_users(
        self,
        actor: Optional[Profile],
        q: Optional[str] = None,
        filter: str = "all",
        page: int = 1,
        page_size: int = 20,
    ) -> Tuple[List[Profile], int, bool]:
        """Accounts by username search and role/ban filter, newest first."""
        require_staff(actor)
        if filter not in USER_FILTERS:
            raise ValidationError(f"filter must be one of: {', '.join(USER_FILTERS)}")

        query = select(Profile)
        if q and q.strip():
            query = query.where(Profile.username.ilike(f"%{q.strip()}%"))
        if filter == "banned":
            query = query.where(Profile.is_banned.is_(True))
        elif filter in ("admin", "moderator"):
            query = query.where(Profile.role == filter)

        return await self._paginate(query, Profile.created_at, page, page_size)

    async def list_reports(
        self,
        actor: Optional[Profile],
        filter: str = "pending",
    ) -> Tuple[List[Report], int]:
        """Reports by status; "all" returns every status. Newest first."""
        require_staff(actor)
        query = select(Report)
        if filter != "all":
            try:
                status = ReportStatus(filter)
            except ValueError:
                raise ValidationError("filter must be one of: pending, resolved, dismissed, all")
            query = query.where(Report.status == status.value)

        result = await self.session.execute(
            query.order_by(desc(Report.created_at)).limit(100)
        )
        reports = list(result.scalars().all())
        total = await self._count(query)
        return reports, total

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _load(self, model, entity_id: uuid.UUID, label: str):
        entity = await self.session.get(model, entity_id)
        if entity is None:
            raise NotFound(f"{label} not found")
        return entity

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except StaleDataError as exc:
            raise ConflictError(
                "The target was modified by another request; reload and retry"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error("Moderation write failed", exc_info=True)
            raise UpstreamFailure() from exc

    async def _admin_count(self) -> int:
        result = await self.session.execute(
            select(func.count(Profile.id)).where(Profile.role == UserRole.ADMIN.value)
        )
        return result.scalar() or 0

    async def _count(self, query) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        return result.scalar() or 0

    async def _paginate(self, query, newest_column, page: int, page_size: int):
        page = max(page, 1)
        offset = (page - 1) * page_size
        result = await self.session.execute(
            query.order_by(desc(newest_column)).offset(offset).limit(page_size)
        )
        items = list(result.scalars().all())
        total = await self._count(query)
        return items, total, total > offset + page_size

    @staticmethod
    def _lift_ban(profile: Profile) -> None:
        profile.is_banned = False
        profile.ban_reason = None
        profile.banned_at = None
        profile.banned_by = None
        profile.appeal_status = AppealStatus.NONE
        profile.appeal_text = None
        profile.appeal_submitted_at = None

    @staticmethod
    def _require_pending_appeal(appeal_status) -> None:
        if enum_value(appeal_status) != AppealStatus.PENDING.value:
            raise ConflictError("There is no pending appeal to resolve")
