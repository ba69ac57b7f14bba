"""Render aggregates for the entry form: "last worked 3 days ago", rounded 1RM."""

from __future__ import annotations

import math
from datetime import datetime

from liftlog.core.clock import ensure_utc, utcnow
from liftlog.schemas.profile import ExerciseSummary, UserAggregates


def relative_time(then: datetime, now: datetime | None = None) -> str:
    days = ((now or utcnow()) - ensure_utc(then)).days
    if days <= 0:
        return "today"
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 14:
        return "1 week ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    if days < 60:
        return "1 month ago"
    return f"{days // 30} months ago"


def exercise_summary(
    aggregates: UserAggregates | None,
    exercise: str,
    category: str | None,
    now: datetime | None = None,
) -> ExerciseSummary:
    now = now or utcnow()
    aggregates = aggregates or UserAggregates()
    summary = ExerciseSummary(exercise=exercise, category=category)

    if category is not None and category in aggregates.last_worked_by_category:
        then = aggregates.last_worked_by_category[category]
        summary.category_last_worked = then
        summary.category_last_worked_ago = relative_time(then, now)

    if exercise in aggregates.last_worked_by_exercise:
        then = aggregates.last_worked_by_exercise[exercise]
        summary.exercise_last_worked = then
        summary.exercise_last_worked_ago = relative_time(then, now)

    record = aggregates.one_rep_max_by_exercise.get(exercise)
    if record is not None:
        summary.one_rep_max = math.floor(record.estimated_max + 0.5)  # half up
        summary.one_rep_max_reps = record.reps_at_max
        summary.one_rep_max_ago = relative_time(record.achieved_on, now)
    return summary
