"""Workout log endpoints. Every write also folds the entry into the user's profile."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import Settings, get_settings
from liftlog.core.errors import ExerciseNotFound, InvalidSetFields, LogEntryNotFound
from liftlog.db.session import get_db
from liftlog.schemas.workout import LogEntryCreate, LogEntryRead, LogEntryUpdate
from liftlog.services import workout_logs

router = APIRouter()


@router.get("", response_model=list[LogEntryRead])
async def list_logs(
    user_id: str | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List log entries, newest first, optionally for one user."""
    return await workout_logs.list_logs(db, user_id)


@router.post("", response_model=LogEntryRead, status_code=201)
async def create_log(
    payload: LogEntryCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Log sets of an existing exercise. Entries with a user_id update that user's stats."""
    try:
        return await workout_logs.create_log(db, payload, settings)
    except ExerciseNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSetFields as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.put("/{entry_id}", response_model=LogEntryRead)
async def update_log(
    entry_id: uuid.UUID,
    payload: LogEntryUpdate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Replace an entry's exercise and sets (same id)."""
    try:
        return await workout_logs.update_log(db, entry_id, payload, settings)
    except (LogEntryNotFound, ExerciseNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidSetFields as e:
        raise HTTPException(status_code=422, detail=str(e))
