"""Muscle group model - reference list for the "define new exercise" selector."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.base import Base


class MuscleGroup(Base):
    """Named muscle group (e.g. Chest, Legs). Read-only from the API; seeded by script."""

    __tablename__ = "muscle_groups"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
