"""Shared enums for models and API."""

from enum import Enum


class ExerciseCategory(str, Enum):
    """Muscle-group bucket used for recency tracking. Declaration order is display order."""

    UPPER_BODY_PUSH = "Upper Body Push"
    UPPER_BODY_PULL = "Upper Body Pull"
    LOWER_BODY = "Lower Body"
    CORE_STABILITY = "Core/Stability"
    CARDIO = "Cardio"
    FULL_BODY_FUNCTIONAL = "Full Body/Functional"


class ExerciseField(str, Enum):
    """Numeric input a set can carry."""

    WEIGHT = "weight"
    REPS = "reps"
    DISTANCE = "distance"  # Distance units (miles)
    DURATION = "duration"  # Seconds


class ExerciseShape(str, Enum):
    """How an exercise is measured, derived from its declared fields."""

    WEIGHT_REPS = "weight_reps"  # Weight & Reps
    WEIGHT_DURATION = "weight_duration"  # Weighted holds, carries
    REPS_ONLY = "reps_only"  # Bodyweight reps
    DURATION_ONLY = "duration_only"  # Time-based (e.g. Planks)
    DISTANCE_DURATION = "distance_duration"  # Runs, rows, sled pushes


class FormMode(str, Enum):
    """Entry form state."""

    IDLE = "idle"
    LOGGING_EXISTING = "logging_existing"
    DEFINING_NEW = "defining_new"
