"""FormBackend that writes straight to the database through the service layer."""

from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from liftlog.core.config import Settings
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead
from liftlog.schemas.workout import LogEntryCreate, LogEntryRead, LogEntryUpdate
from liftlog.services import catalog, workout_logs
from liftlog.services.entry_form import EntryFormController


class DatabaseFormBackend:
    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def create_exercise(self, definition: ExerciseCreate) -> ExerciseRead:
        exercise = await catalog.create_exercise(self.db, definition)
        return ExerciseRead.model_validate(exercise)

    async def add_entry(self, entry: LogEntryCreate) -> LogEntryRead:
        return await workout_logs.create_log(self.db, entry, self.settings)

    async def update_entry(self, entry_id: uuid.UUID, entry: LogEntryUpdate) -> LogEntryRead:
        return await workout_logs.update_log(self.db, entry_id, entry, self.settings)


async def load_controller(
    db: AsyncSession, settings: Settings, user_id: str | None = None
) -> EntryFormController:
    """Controller over the current catalog and the user's history."""
    exercises = [ExerciseRead.model_validate(e) for e in await catalog.list_exercises(db)]
    history = await workout_logs.list_logs(db, user_id) if user_id is not None else []
    return EntryFormController(
        DatabaseFormBackend(db, settings),
        exercises,
        user_id=user_id,
        recent_entries=[LogEntryRead.model_validate(e) for e in history],
        edit_timestamp_policy=settings.edit_timestamp_policy,
    )
