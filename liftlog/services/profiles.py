"""Aggregate store: per-user profile documents, updated with compare-and-swap."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.errors import AggregateConflict
from liftlog.models.user_profile import UserProfile
from liftlog.schemas.profile import UserAggregates
from liftlog.services.stats import LastWorkedPolicy, apply_entry

logger = logging.getLogger(__name__)

_COLUMNS = (
    UserProfile.version,
    UserProfile.last_worked_by_category,
    UserProfile.last_worked_by_exercise,
    UserProfile.one_rep_max_by_exercise,
)


def aggregates_from_row(row: Any) -> UserAggregates:
    return UserAggregates(
        last_worked_by_category=row.last_worked_by_category or {},
        last_worked_by_exercise=row.last_worked_by_exercise or {},
        one_rep_max_by_exercise=row.one_rep_max_by_exercise or {},
    )


def aggregate_columns(aggregates: UserAggregates) -> dict[str, Any]:
    """Column values for a merge-write: only the three maps, JSON-ready."""
    data = aggregates.model_dump(mode="json", by_alias=True)
    return {
        "last_worked_by_category": data["lastWorkedByCategory"],
        "last_worked_by_exercise": data["lastWorkedByExercise"],
        "one_rep_max_by_exercise": data["oneRepMaxByExercise"],
    }


async def get_profile(db: AsyncSession, user_id: str) -> UserProfile | None:
    result = await db.execute(select(UserProfile).where(UserProfile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_aggregates(db: AsyncSession, user_id: str) -> UserAggregates | None:
    result = await db.execute(select(*_COLUMNS).where(UserProfile.user_id == user_id))
    row = result.one_or_none()
    return aggregates_from_row(row) if row is not None else None


async def _compare_and_swap(
    db: AsyncSession, user_id: str, expected_version: int | None, aggregates: UserAggregates
) -> bool:
    """Write `aggregates` if the stored version is still `expected_version` (None = no row yet)."""
    values = aggregate_columns(aggregates)
    if expected_version is None:
        try:
            await db.execute(insert(UserProfile).values(user_id=user_id, version=1, **values))
            await db.commit()
        except IntegrityError:
            await db.rollback()
            return False
        return True
    result = await db.execute(
        update(UserProfile)
        .where(UserProfile.user_id == user_id, UserProfile.version == expected_version)
        .values(version=expected_version + 1, **values)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        await db.rollback()
        return False
    await db.commit()
    return True


async def update_profile(
    db: AsyncSession,
    user_id: str,
    transform,
    *,
    retries: int = 5,
) -> UserAggregates:
    """Read-modify-write the user's aggregates with `transform(prev | None) -> UserAggregates`.

    Retries from a fresh read when another writer bumped the version in between.
    """
    for attempt in range(1, retries + 1):
        result = await db.execute(select(*_COLUMNS).where(UserProfile.user_id == user_id))
        row = result.one_or_none()
        prev = aggregates_from_row(row) if row is not None else None
        nxt = transform(prev)
        if await _compare_and_swap(db, user_id, row.version if row is not None else None, nxt):
            return nxt
        logger.warning("Profile %s changed concurrently (attempt %d/%d)", user_id, attempt, retries)
    raise AggregateConflict(user_id, retries)


async def record_entry(
    db: AsyncSession,
    user_id: str,
    entry: Any,
    exercise_def: Any | None,
    *,
    last_worked_policy: LastWorkedPolicy = "overwrite",
    retries: int = 5,
) -> UserAggregates:
    """Fold one committed log entry into the user's aggregates."""
    return await update_profile(
        db,
        user_id,
        lambda prev: apply_entry(prev, entry, exercise_def, last_worked_policy),
        retries=retries,
    )


async def replace_aggregates(
    db: AsyncSession, user_id: str, aggregates: UserAggregates, *, retries: int = 5
) -> UserAggregates:
    """Overwrite the three maps wholesale (used by the rebuild path)."""
    return await update_profile(db, user_id, lambda _prev: aggregates, retries=retries)
