"""WorkoutLog model - one logged exercise with its sets."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import ForeignKey, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.base import Base


class WorkoutLog(Base):
    """A log entry: exercise name + ordered sets, timestamped.

    sets is a JSON list of sparse dicts carrying only the exercise's fields,
    e.g. [{"weight": 135, "reps": 5}, {"weight": 135, "reps": 4}].
    """

    __tablename__ = "workout_logs"
    __table_args__ = (
        Index("ix_workout_logs_user_date", "user_id", "date"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[str | None] = mapped_column(String(128), nullable=True)  # None = anonymous
    exercise: Mapped[str] = mapped_column(
        String(255), ForeignKey("workout_library.name"), nullable=False, index=True
    )
    sets: Mapped[list[Any]] = mapped_column(nullable=False)
    date: Mapped[datetime] = mapped_column(default=lambda: datetime.now(timezone.utc))
