"""Exercise model - the workout library: category, declared fields and muscles per exercise."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy import Enum, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.core.enums import ExerciseCategory, ExerciseShape
from liftlog.db.base import Base
from liftlog.services.shapes import shape_for_fields


class Exercise(Base):
    """Exercise definition. `name` is the natural key; log entries reference it by name."""

    __tablename__ = "workout_library"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    category: Mapped[ExerciseCategory] = mapped_column(
        Enum(ExerciseCategory, values_callable=lambda e: [m.value for m in e]), nullable=False
    )
    fields: Mapped[list[Any]] = mapped_column(nullable=False)  # ["weight", "reps"]
    primary_muscles: Mapped[list[Any]] = mapped_column(default=list)
    secondary_muscles: Mapped[list[Any]] = mapped_column(default=list)
    major_muscle_group: Mapped[str] = mapped_column(String(100), default="")
    icon_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    @property
    def shape(self) -> ExerciseShape:
        return shape_for_fields(self.fields)
