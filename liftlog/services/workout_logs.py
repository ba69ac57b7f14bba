"""Log store: write paths for workout log entries and their aggregate side effect."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.clock import ensure_utc, utcnow
from liftlog.core.config import Settings
from liftlog.core.errors import AggregateConflict, ExerciseNotFound, InvalidSetFields, LogEntryNotFound
from liftlog.models.exercise import Exercise
from liftlog.models.workout import WorkoutLog
from liftlog.schemas.exercise import ExerciseRead
from liftlog.schemas.profile import UserAggregates
from liftlog.schemas.workout import LogEntryCreate, LogEntryRead, LogEntryUpdate, SetEntry
from liftlog.services import catalog, profiles
from liftlog.services.shapes import check_set_fields, is_complete
from liftlog.services.stats import rebuild_aggregates

logger = logging.getLogger(__name__)


async def list_logs(db: AsyncSession, user_id: str | None = None) -> list[WorkoutLog]:
    """Entries newest first, optionally for one user."""
    stmt = select(WorkoutLog)
    if user_id is not None:
        stmt = stmt.where(WorkoutLog.user_id == user_id)
    result = await db.execute(stmt.order_by(WorkoutLog.date.desc()))
    return list(result.scalars().all())


async def get_log(db: AsyncSession, entry_id: uuid.UUID) -> WorkoutLog:
    result = await db.execute(select(WorkoutLog).where(WorkoutLog.id == entry_id))
    log = result.scalar_one_or_none()
    if log is None:
        raise LogEntryNotFound(entry_id)
    return log


async def _resolve(db: AsyncSession, name: str, sets: list[SetEntry]) -> tuple[Exercise, list[dict]]:
    exercise = await catalog.get_exercise(db, name)
    if exercise is None:
        raise ExerciseNotFound(name)
    stored = [s.as_dict() for s in sets]
    for s in stored:
        check_set_fields(s, exercise.fields)
        if not is_complete(exercise.shape, s):
            raise InvalidSetFields(f"Incomplete set for {exercise.name}: {s}")
    return exercise, stored


async def _update_stats(db: AsyncSession, log: LogEntryRead, exercise: Exercise, settings: Settings) -> None:
    """Fold the committed entry into its user's aggregates.

    Failures leave the aggregates stale; the entry itself is already committed.
    """
    if log.user_id is None:
        return
    definition = ExerciseRead.model_validate(exercise)
    try:
        await profiles.record_entry(
            db,
            log.user_id,
            log,
            definition,
            last_worked_policy=settings.last_worked_policy,
            retries=settings.aggregate_update_retries,
        )
    except (SQLAlchemyError, AggregateConflict):
        logger.exception("Aggregate update failed for user %s after entry %s", log.user_id, log.id)
        await db.rollback()


async def create_log(db: AsyncSession, payload: LogEntryCreate, settings: Settings) -> LogEntryRead:
    exercise, sets = await _resolve(db, payload.exercise, payload.sets)
    log = WorkoutLog(
        user_id=payload.user_id,
        exercise=exercise.name,
        sets=sets,
        date=ensure_utc(payload.date) if payload.date else utcnow(),
    )
    db.add(log)
    await db.commit()
    entry = LogEntryRead.model_validate(log)
    logger.info("Logged %d set(s) of %r for user %s", len(sets), entry.exercise, entry.user_id)
    await _update_stats(db, entry, exercise, settings)
    return entry


async def update_log(
    db: AsyncSession, entry_id: uuid.UUID, payload: LogEntryUpdate, settings: Settings
) -> LogEntryRead:
    """Replace an entry's exercise and sets in place; same id."""
    log = await get_log(db, entry_id)
    exercise, sets = await _resolve(db, payload.exercise, payload.sets)
    if payload.date is not None:
        date = ensure_utc(payload.date)
    elif settings.edit_timestamp_policy == "refresh":
        date = utcnow()
    else:
        date = ensure_utc(log.date)
    log.exercise = exercise.name
    log.sets = sets
    log.date = date
    await db.commit()
    entry = LogEntryRead.model_validate(log)
    await _update_stats(db, entry, exercise, settings)
    return entry


async def rebuild_profile(db: AsyncSession, user_id: str, settings: Settings) -> UserAggregates:
    """Recompute a user's aggregates from every entry they have logged."""
    entries = await list_logs(db, user_id)
    exercises = await catalog.list_exercises(db)
    aggregates = rebuild_aggregates(entries, {e.name: e for e in exercises})
    logger.info("Rebuilt profile for %s from %d entries", user_id, len(entries))
    return await profiles.replace_aggregates(
        db, user_id, aggregates, retries=settings.aggregate_update_retries
    )
