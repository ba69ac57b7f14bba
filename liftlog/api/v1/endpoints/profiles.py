"""User profile endpoints: aggregate stats, form summary, rebuild from history."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import Settings, get_settings
from liftlog.core.errors import AggregateConflict
from liftlog.db.session import get_db
from liftlog.schemas.profile import ExerciseSummary, UserAggregates, UserProfileRead
from liftlog.services import catalog, profiles, workout_logs
from liftlog.services.summaries import exercise_summary

router = APIRouter()


@router.get("/{user_id}", response_model=UserProfileRead)
async def get_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Last worked per category/exercise and best estimated 1RM per exercise."""
    profile = await profiles.get_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return UserProfileRead(
        user_id=profile.user_id,
        version=profile.version,
        **profiles.aggregates_from_row(profile).model_dump(),
    )


@router.get("/{user_id}/summary", response_model=ExerciseSummary)
async def get_summary(
    user_id: str,
    exercise: str,
    db: AsyncSession = Depends(get_db),
):
    """What the entry form shows for the selected exercise (relative times, rounded 1RM)."""
    definition = await catalog.get_exercise(db, exercise)
    if not definition:
        raise HTTPException(status_code=404, detail="Exercise not found")
    aggregates = await profiles.get_aggregates(db, user_id)
    return exercise_summary(aggregates, definition.name, definition.category.value)


@router.post("/{user_id}/rebuild", response_model=UserAggregates)
async def rebuild_profile(
    user_id: str,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Recompute the profile from the user's full log history."""
    try:
        return await workout_logs.rebuild_profile(db, user_id, settings)
    except AggregateConflict as e:
        raise HTTPException(status_code=409, detail=str(e))
