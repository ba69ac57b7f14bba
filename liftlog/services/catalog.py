"""Exercise catalog: the workout library and the muscle-group reference list."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.constants import CATEGORY_ORDER
from liftlog.core.enums import ExerciseCategory
from liftlog.core.errors import ExerciseAlreadyExists
from liftlog.models.exercise import Exercise
from liftlog.models.muscle_group import MuscleGroup
from liftlog.schemas.exercise import ExerciseCreate

logger = logging.getLogger(__name__)


def sort_exercises(exercises: list[Exercise]) -> list[Exercise]:
    """Category tile order first, then name."""
    return sorted(exercises, key=lambda e: (CATEGORY_ORDER.index(e.category), e.name))


async def list_exercises(
    db: AsyncSession, category: ExerciseCategory | None = None
) -> list[Exercise]:
    stmt = select(Exercise)
    if category is not None:
        stmt = stmt.where(Exercise.category == category)
    result = await db.execute(stmt)
    return sort_exercises(list(result.scalars().all()))


async def get_exercise(db: AsyncSession, name: str) -> Exercise | None:
    result = await db.execute(select(Exercise).where(Exercise.name == name))
    return result.scalar_one_or_none()


async def create_exercise(db: AsyncSession, payload: ExerciseCreate) -> Exercise:
    """Insert a new exercise; names are unique.

    The lookup catches the common case; the unique index on name catches a
    concurrent insert between the lookup and the flush.
    """
    if await get_exercise(db, payload.name) is not None:
        raise ExerciseAlreadyExists(payload.name)
    exercise = Exercise(
        name=payload.name,
        category=payload.category,
        fields=[f.value for f in payload.fields],
        primary_muscles=list(payload.primary_muscles),
        secondary_muscles=list(payload.secondary_muscles),
        major_muscle_group=payload.major_muscle_group,
        icon_url=payload.icon_url,
    )
    db.add(exercise)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ExerciseAlreadyExists(payload.name) from None
    logger.info("Created exercise %r (%s)", exercise.name, exercise.category.value)
    return exercise


async def list_muscle_groups(db: AsyncSession) -> list[MuscleGroup]:
    result = await db.execute(select(MuscleGroup).order_by(MuscleGroup.name))
    return list(result.scalars().all())
