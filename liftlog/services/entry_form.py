"""Entry form controller: the state machine behind "pick an exercise, fill its sets, submit".

The controller holds raw string drafts (what the user typed) and only turns them
into numbers on submit. Which inputs a draft carries follows the exercise's
shape; submit refuses silently (returns None, state untouched) when a draft is
incomplete for that shape.

Writes go through a FormBackend, so the same controller drives the database
directly (DatabaseFormBackend) or a fake in tests.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Literal, Protocol

from pydantic import ValidationError

from liftlog.core.clock import utcnow
from liftlog.core.constants import DEFAULT_CATEGORY
from liftlog.core.enums import ExerciseCategory, ExerciseField, ExerciseShape, FormMode
from liftlog.core.errors import ExerciseNotFound, UnknownFormField
from liftlog.schemas.exercise import ExerciseCreate, ExerciseRead
from liftlog.schemas.workout import LogEntryCreate, LogEntryRead, LogEntryUpdate, SetEntry
from liftlog.services.shapes import (
    allows_multiple_sets,
    draft_from_set,
    empty_draft,
    is_complete,
    normalize_fields,
    parse_draft,
    shape_for_fields,
)

logger = logging.getLogger(__name__)


class FormBackend(Protocol):
    async def create_exercise(self, definition: ExerciseCreate) -> ExerciseRead: ...

    async def add_entry(self, entry: LogEntryCreate) -> LogEntryRead: ...

    async def update_entry(self, entry_id: uuid.UUID, entry: LogEntryUpdate) -> LogEntryRead: ...


class EntryFormController:
    """Form state for logging a workout entry or defining a new exercise inline."""

    def __init__(
        self,
        backend: FormBackend,
        exercises: Iterable[ExerciseRead],
        *,
        user_id: str | None = None,
        recent_entries: Iterable[LogEntryRead] = (),
        edit_timestamp_policy: Literal["refresh", "preserve"] = "refresh",
        clock: Callable[[], datetime] = utcnow,
    ):
        self.backend = backend
        self.exercises: dict[str, ExerciseRead] = {e.name: e for e in exercises}
        self.user_id = user_id
        self.recent_entries = list(recent_entries)  # newest first
        self.edit_timestamp_policy = edit_timestamp_policy
        self._clock = clock
        self._reset()

    def _reset(self) -> None:
        self.mode = FormMode.IDLE
        self.selected_category: ExerciseCategory = DEFAULT_CATEGORY
        self.selected_exercise_name: str | None = None
        self.new_exercise_name = ""
        self.new_exercise_muscle_group = ""
        self.new_exercise_fields: list[ExerciseField] = []
        self.pending_sets: list[dict[str, str]] = []
        self.editing_entry: LogEntryRead | None = None

    # -- derived state -----------------------------------------------------

    @property
    def editing_entry_id(self) -> uuid.UUID | None:
        return self.editing_entry.id if self.editing_entry is not None else None

    @property
    def is_editing(self) -> bool:
        return self.editing_entry is not None

    @property
    def selected_exercise(self) -> ExerciseRead | None:
        if self.mode is not FormMode.LOGGING_EXISTING or self.selected_exercise_name is None:
            return None
        return self.exercises.get(self.selected_exercise_name)

    @property
    def active_fields(self) -> list[ExerciseField]:
        """Inputs shown for each set row."""
        if self.mode is FormMode.DEFINING_NEW:
            return list(self.new_exercise_fields)
        exercise = self.selected_exercise
        return list(exercise.fields) if exercise is not None else []

    @property
    def shape(self) -> ExerciseShape | None:
        fields = self.active_fields
        return shape_for_fields(fields) if fields else None

    @property
    def can_add_set(self) -> bool:
        shape = self.shape
        return shape is not None and allows_multiple_sets(shape)

    # -- transitions -------------------------------------------------------

    def select_category(self, category: ExerciseCategory | str) -> None:
        """Category tile: only sets the default category for a new exercise / filter."""
        self.selected_category = ExerciseCategory(category)

    def visible_exercises(self) -> list[ExerciseRead]:
        return [e for e in self.exercises.values() if e.category == self.selected_category]

    def select_exercise(self, name: str, *, prefill: bool = False) -> None:
        """Exercise tile. Ignored while editing an entry.

        prefill seeds the draft from the first set of the most recent entry
        for this exercise instead of leaving it blank.
        """
        if self.is_editing:
            return
        exercise = self.exercises.get(name)
        if exercise is None:
            raise ExerciseNotFound(name)
        self.mode = FormMode.LOGGING_EXISTING
        self.selected_exercise_name = exercise.name
        self.selected_category = exercise.category
        self.new_exercise_name = ""
        self.new_exercise_muscle_group = ""
        self.new_exercise_fields = []
        draft = empty_draft(exercise.fields)
        if prefill:
            recent = next((e for e in self.recent_entries if e.exercise == exercise.name), None)
            if recent is not None and recent.sets:
                draft = draft_from_set(recent.sets[0].as_dict(), exercise.fields)
        self.pending_sets = [draft]

    def define_new_exercise(self) -> None:
        """The "+" tile. Ignored while editing an entry."""
        if self.is_editing:
            return
        self.mode = FormMode.DEFINING_NEW
        self.selected_exercise_name = None
        self.new_exercise_name = ""
        self.new_exercise_muscle_group = ""
        self.new_exercise_fields = []
        self.pending_sets = []

    def set_new_exercise_fields(self, fields: Iterable[ExerciseField | str]) -> None:
        """Choose what the new exercise measures. Raises ValueError for unsupported combinations."""
        if self.mode is not FormMode.DEFINING_NEW:
            return
        normalized = normalize_fields(fields)
        shape_for_fields(normalized)
        self.new_exercise_fields = normalized
        self.pending_sets = [empty_draft(normalized)]

    def begin_edit(self, entry: LogEntryRead) -> None:
        """Load an existing entry; one draft row per stored set."""
        exercise = self.exercises.get(entry.exercise)
        if exercise is None:
            raise ExerciseNotFound(entry.exercise)
        self.mode = FormMode.LOGGING_EXISTING
        self.selected_exercise_name = exercise.name
        self.selected_category = exercise.category
        self.new_exercise_name = ""
        self.new_exercise_muscle_group = ""
        self.new_exercise_fields = []
        self.editing_entry = entry
        self.pending_sets = [draft_from_set(s.as_dict(), exercise.fields) for s in entry.sets]
        if not self.pending_sets:
            self.pending_sets = [empty_draft(exercise.fields)]

    def cancel_edit(self) -> None:
        if not self.is_editing:
            return
        self._reset()

    def add_set(self) -> bool:
        """Append a blank row. False when the shape is a single combined row (or nothing is selected)."""
        if not self.can_add_set:
            return False
        self.pending_sets.append(empty_draft(self.active_fields))
        return True

    def remove_set(self, index: int) -> None:
        del self.pending_sets[index]

    def set_field(self, index: int, field: ExerciseField | str, value: str) -> None:
        field = ExerciseField(field)
        if field not in self.active_fields:
            raise UnknownFormField(f"{field.value} is not an input of the current exercise")
        self.pending_sets[index][field.value] = value

    # -- submit ------------------------------------------------------------

    def _collect_sets(self) -> list[SetEntry] | None:
        shape = self.shape
        if shape is None or not self.pending_sets:
            return None
        sets: list[SetEntry] = []
        for draft in self.pending_sets:
            parsed = parse_draft(draft, self.active_fields)
            if parsed is None or not is_complete(shape, parsed):
                return None
            sets.append(SetEntry(**parsed))
        return sets

    async def submit(self) -> LogEntryRead | None:
        """Write the entry (defining the exercise first when needed).

        Returns the stored entry, or None when the form is not submittable; in
        that case nothing is written and the form is left as it was.
        Store errors propagate.
        """
        if self.mode is FormMode.DEFINING_NEW:
            return await self._submit_new_exercise()
        if self.mode is FormMode.LOGGING_EXISTING:
            return await self._submit_existing()
        return None

    async def _submit_new_exercise(self) -> LogEntryRead | None:
        name = self.new_exercise_name.strip()
        muscle_group = self.new_exercise_muscle_group.strip()
        if not name or not muscle_group or not self.new_exercise_fields:
            return None
        sets = self._collect_sets()
        if sets is None:
            return None
        try:
            definition = ExerciseCreate(
                name=name,
                category=self.selected_category,
                fields=self.new_exercise_fields,
                major_muscle_group=muscle_group,
            )
        except ValidationError:
            return None
        created = await self.backend.create_exercise(definition)
        self.exercises[created.name] = created
        entry = await self.backend.add_entry(
            LogEntryCreate(user_id=self.user_id, exercise=created.name, sets=sets, date=self._clock())
        )
        self._remember(entry)
        self._reset()
        return entry

    async def _submit_existing(self) -> LogEntryRead | None:
        exercise = self.selected_exercise
        if exercise is None:
            return None
        sets = self._collect_sets()
        if sets is None:
            return None
        if self.editing_entry is not None:
            if self.edit_timestamp_policy == "preserve":
                date = self.editing_entry.date
            else:
                date = self._clock()
            entry = await self.backend.update_entry(
                self.editing_entry.id,
                LogEntryUpdate(exercise=exercise.name, sets=sets, date=date),
            )
        else:
            entry = await self.backend.add_entry(
                LogEntryCreate(user_id=self.user_id, exercise=exercise.name, sets=sets, date=self._clock())
            )
        self._remember(entry)
        self._reset()
        return entry

    def _remember(self, entry: LogEntryRead) -> None:
        self.recent_entries = [entry] + [e for e in self.recent_entries if e.id != entry.id]
        logger.debug("Submitted entry %s (%s)", entry.id, entry.exercise)
