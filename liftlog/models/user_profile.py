"""UserProfile model - per-user derived workout statistics."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from liftlog.db.base import Base


class UserProfile(Base):
    """Aggregate document for one user, rebuilt incrementally from each log write.

    last_worked_by_category: {"Lower Body": "2025-03-01T18:04:11+00:00", ...}
    last_worked_by_exercise: {"Squat": "2025-03-01T18:04:11+00:00", ...}
    one_rep_max_by_exercise: {"Squat": {"estimatedMax": 275.0, "repsAtMax": 5, "achievedOn": "..."}}

    version is bumped on every write; updates are compare-and-swap on it.
    """

    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    last_worked_by_category: Mapped[dict[str, Any]] = mapped_column(default=dict)
    last_worked_by_exercise: Mapped[dict[str, Any]] = mapped_column(default=dict)
    one_rep_max_by_exercise: Mapped[dict[str, Any]] = mapped_column(default=dict)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
