"""Stats engine: fold a logged entry into a user's aggregate statistics.

Pure functions only. Reading and persisting the aggregate document is done by
liftlog.services.profiles.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Literal

from liftlog.core.clock import ensure_utc
from liftlog.core.constants import EPLEY_DIVISOR
from liftlog.schemas.profile import OneRepMaxRecord, UserAggregates

LastWorkedPolicy = Literal["overwrite", "latest"]


def estimate_one_rep_max(weight: float, reps: int) -> float:
    """Epley estimate: weight * (1 + reps / 30)."""
    return weight * (1 + reps / EPLEY_DIVISOR)


def _as_mapping(set_: Any) -> Mapping[str, Any]:
    return set_ if isinstance(set_, Mapping) else set_.as_dict()


def best_estimate(sets: Iterable[Any]) -> tuple[float, Mapping[str, Any]] | None:
    """Highest 1RM estimate among sets carrying positive weight AND reps, with its set.

    Ties keep the earlier set. Estimates that overflow to inf are skipped.
    """
    best: tuple[float, Mapping[str, Any]] | None = None
    for s in map(_as_mapping, sets):
        weight, reps = s.get("weight"), s.get("reps")
        if weight is None or reps is None or weight <= 0 or reps <= 0:
            continue
        est = estimate_one_rep_max(float(weight), int(reps))
        if not math.isfinite(est):
            continue
        if best is None or est > best[0]:
            best = (est, s)
    return best


def _stamp(current: datetime | None, date: datetime, policy: LastWorkedPolicy) -> datetime:
    if policy == "latest" and current is not None and ensure_utc(current) >= date:
        return current
    return date


def apply_entry(
    prev: UserAggregates | None,
    entry: Any,
    exercise_def: Any | None,
    last_worked_policy: LastWorkedPolicy = "overwrite",
) -> UserAggregates:
    """Return the aggregates after logging `entry`.

    `entry` has exercise / sets / date attributes (LogEntryRead or a WorkoutLog
    row); `exercise_def` has a category (None when the exercise is no longer in
    the catalog, which skips the category map).

    - last-worked for the category and the exercise become entry.date
      ("overwrite"), or the later of the stored value and entry.date ("latest");
    - the exercise's 1RM record is replaced only by a strictly greater estimate.

    `prev` is never mutated; untouched keys are carried over.
    """
    prev = prev or UserAggregates()
    date = ensure_utc(entry.date)
    by_category = dict(prev.last_worked_by_category)
    by_exercise = dict(prev.last_worked_by_exercise)
    one_rep_max = dict(prev.one_rep_max_by_exercise)

    if exercise_def is not None:
        category = getattr(exercise_def.category, "value", exercise_def.category)
        by_category[category] = _stamp(by_category.get(category), date, last_worked_policy)
    by_exercise[entry.exercise] = _stamp(by_exercise.get(entry.exercise), date, last_worked_policy)

    candidate = best_estimate(entry.sets)
    if candidate is not None:
        estimate, best_set = candidate
        stored = one_rep_max.get(entry.exercise)
        if stored is None or estimate > stored.estimated_max:
            one_rep_max[entry.exercise] = OneRepMaxRecord(
                estimated_max=estimate,
                reps_at_max=int(best_set["reps"]),
                achieved_on=date,
            )

    return UserAggregates(
        last_worked_by_category=by_category,
        last_worked_by_exercise=by_exercise,
        one_rep_max_by_exercise=one_rep_max,
    )


def rebuild_aggregates(entries: Iterable[Any], catalog: Mapping[str, Any]) -> UserAggregates:
    """Recompute aggregates from a user's whole history.

    `catalog` maps exercise name to its definition. Entries are folded oldest
    first with the "latest" policy, so out-of-order backfills cannot move
    last-worked backwards.
    """
    aggregates: UserAggregates | None = None
    for entry in sorted(entries, key=lambda e: ensure_utc(e.date)):
        aggregates = apply_entry(
            aggregates, entry, catalog.get(entry.exercise), last_worked_policy="latest"
        )
    return aggregates or UserAggregates()
