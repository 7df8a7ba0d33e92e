"""
User-filed reports. Staff resolve them through ModerationService.
"""

import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.errors import Forbidden, NotFound, ValidationError
from comichub.kernel.models.profile import Profile
from comichub.kernel.models.recommendation import Recommendation
from comichub.kernel.models.report import Report, ReportedEntity, ReportStatus
from comichub.kernel.models.review import Review
from comichub.logging_config import get_logger

logger = get_logger(__name__)

_REPORTABLE_MODELS = {
    ReportedEntity.RECOMMENDATION: Recommendation,
    ReportedEntity.REVIEW: Review,
    ReportedEntity.USER: Profile,
}


class ReportService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        reporter: Profile,
        entity_type: str,
        entity_id: uuid.UUID,
        reason: str,
        details: Optional[str] = None,
    ) -> Report:
        if reporter.is_banned:
            raise Forbidden("Your account is suspended")

        try:
            entity_type = ReportedEntity(entity_type)
        except ValueError:
            raise ValidationError("entity_type must be one of: recommendation, review, user")

        reason = (reason or "").strip()
        if not reason:
            raise ValidationError("A reason is required")

        target = await self.session.get(_REPORTABLE_MODELS[entity_type], entity_id)
        if target is None:
            raise NotFound(f"Reported {entity_type.value} not found")

        report = Report(
            reporter_id=reporter.id,
            entity_type=entity_type,
            entity_id=entity_id,
            reason=reason,
            details=details,
            status=ReportStatus.PENDING,
        )
        self.session.add(report)
        await self.session.flush()

        logger.info(
            "Report filed",
            extra={
                "report_id": str(report.id),
                "reported_entity_type": entity_type.value,
                "reported_entity_id": str(entity_id),
            },
        )
        return report
