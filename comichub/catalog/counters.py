"""
Denormalized counters on recommendations.

Counters are changed with a SQL-side UPDATE that bypasses ORM versioning.
They never bump the recommendation's version column.
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from comichub.kernel.models.recommendation import Recommendation

COUNTER_COLUMNS = ("upvotes", "downvotes", "save_count", "review_count")


async def adjust_counters(session: AsyncSession, rec: Recommendation, **deltas: int) -> None:
    """
    Add deltas to counter columns and reload them onto rec.

    score is kept equal to upvotes - downvotes.
    """
    unknown = set(deltas) - set(COUNTER_COLUMNS)
    if unknown:
        raise ValueError(f"Not a counter column: {', '.join(sorted(unknown))}")

    values = {
        name: getattr(Recommendation, name) + delta
        for name, delta in deltas.items()
        if delta
    }
    score_delta = deltas.get("upvotes", 0) - deltas.get("downvotes", 0)
    if score_delta:
        values["score"] = Recommendation.score + score_delta
    if not values:
        return

    await session.execute(
        update(Recommendation)
        .where(Recommendation.id == rec.id)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    await session.refresh(rec, attribute_names=list(values))
