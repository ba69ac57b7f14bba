"""Exercise shapes: which inputs an exercise takes and when a set of them is complete.

Form drafts are dicts of raw strings keyed by field name ("" = blank); stored sets
are sparse dicts of numbers. parse_draft / draft_from_set convert between the two.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from typing import Any

from liftlog.core.constants import SHAPE_BY_FIELDS, SINGLE_ROW_SHAPES
from liftlog.core.enums import ExerciseField, ExerciseShape
from liftlog.core.errors import InvalidSetFields

# Canonical field order for drafts and responses
FIELD_ORDER = list(ExerciseField)


def normalize_fields(fields: Iterable[str | ExerciseField]) -> list[ExerciseField]:
    """Dedupe and order fields canonically. Raises ValueError for unknown names."""
    chosen = {ExerciseField(f) for f in fields}
    return [f for f in FIELD_ORDER if f in chosen]


def shape_for_fields(fields: Iterable[str | ExerciseField]) -> ExerciseShape:
    """Map a declared field set to its shape. Raises ValueError for unsupported combinations."""
    key = frozenset(normalize_fields(fields))
    try:
        return SHAPE_BY_FIELDS[key]
    except KeyError:
        names = ", ".join(sorted(f.value for f in key)) or "none"
        raise ValueError(f"Unsupported field combination: {names}") from None


def allows_multiple_sets(shape: ExerciseShape) -> bool:
    return shape not in SINGLE_ROW_SHAPES


def empty_draft(fields: Iterable[str | ExerciseField]) -> dict[str, str]:
    return {f.value: "" for f in normalize_fields(fields)}


def parse_duration_input(raw: str) -> float:
    """Seconds from "m:ss" or a plain number of seconds.

    Raises ValueError unless both parts of "m:ss" are digits and seconds < 60.
    """
    if ":" in raw:
        minutes, _, seconds = raw.partition(":")
        if (minutes and not minutes.isdigit()) or not seconds.isdigit() or int(seconds) >= 60:
            raise ValueError(f"Invalid duration: {raw!r}")
        return int(minutes or 0) * 60 + int(seconds)
    return float(raw)


def _parse_value(field: ExerciseField, raw: str) -> float | int:
    if field is ExerciseField.REPS:
        return int(raw)
    if field is ExerciseField.DURATION:
        return parse_duration_input(raw)
    return float(raw)


def parse_draft(draft: Mapping[str, str], fields: Iterable[str | ExerciseField]) -> dict[str, Any] | None:
    """Turn a draft into a sparse set dict. Blank inputs are omitted.

    Returns None when any filled input is not a finite non-negative number
    (reps must be a whole number).
    """
    out: dict[str, Any] = {}
    for field in normalize_fields(fields):
        raw = (draft.get(field.value) or "").strip()
        if not raw:
            continue
        try:
            value = _parse_value(field, raw)
        except ValueError:
            return None
        if not math.isfinite(value) or value < 0:
            return None
        out[field.value] = value
    return out


def is_complete(shape: ExerciseShape, set_: Mapping[str, Any]) -> bool:
    """Whether a parsed set carries enough inputs to be logged for this shape."""
    has = {k for k, v in set_.items() if v is not None}
    if shape is ExerciseShape.WEIGHT_REPS:
        return {"weight", "reps"} <= has
    if shape is ExerciseShape.WEIGHT_DURATION:
        return {"weight", "duration"} <= has
    if shape is ExerciseShape.REPS_ONLY:
        return set_.get("reps", 0) > 0
    if shape is ExerciseShape.DURATION_ONLY:
        return set_.get("duration", 0) > 0
    if shape is ExerciseShape.DISTANCE_DURATION:
        return bool(has & {"distance", "duration"})
    raise AssertionError(f"unhandled shape {shape!r}")


def format_number(value: float | int) -> str:
    """Shortest text that parses back to the same number."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def draft_from_set(set_: Mapping[str, Any], fields: Iterable[str | ExerciseField]) -> dict[str, str]:
    """Form inputs for a stored set; fields the set lacks come back blank."""
    draft = empty_draft(fields)
    for key in draft:
        value = set_.get(key)
        if value is not None:
            draft[key] = format_number(value)
    return draft


def check_set_fields(set_: Mapping[str, Any], fields: Iterable[str | ExerciseField]) -> None:
    """Raise InvalidSetFields unless every key is declared and every value is non-negative."""
    allowed = {f.value for f in normalize_fields(fields)}
    extra = sorted(set(set_) - allowed)
    if extra:
        raise InvalidSetFields(f"Fields not declared by the exercise: {', '.join(extra)}")
    for key, value in set_.items():
        if value is not None and value < 0:
            raise InvalidSetFields(f"{key} must be non-negative")
