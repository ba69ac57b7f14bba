"""Workout log and set schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from liftlog.core.clock import ensure_utc


class SetEntry(BaseModel):
    """One performed set. Only the exercise's declared fields may be present."""

    model_config = ConfigDict(extra="forbid", allow_inf_nan=False)

    weight: float | None = Field(None, ge=0)
    reps: int | None = Field(None, ge=0)
    distance: float | None = Field(None, ge=0)
    duration: float | None = Field(None, ge=0)  # seconds

    def as_dict(self) -> dict:
        """Sparse storage form: absent fields are dropped, not stored as null."""
        return self.model_dump(exclude_none=True)


class LogEntryBase(BaseModel):
    exercise: str = Field(..., min_length=1, max_length=255)
    sets: list[SetEntry] = Field(..., min_length=1)


class LogEntryCreate(LogEntryBase):
    user_id: str | None = Field(None, max_length=128)  # None = anonymous, no stats
    date: datetime | None = None  # Server time when omitted


class LogEntryUpdate(LogEntryBase):
    date: datetime | None = None  # Omitted: refresh or preserve per EDIT_TIMESTAMP_POLICY


class LogEntryRead(LogEntryBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    user_id: str | None = None
    date: datetime

    @field_validator("date")
    @classmethod
    def _utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_serializer("sets")
    def _sparse_sets(self, sets: list[SetEntry]) -> list[dict]:
        return [s.as_dict() for s in sets]
