"""Application constants."""

from liftlog.core.enums import ExerciseCategory, ExerciseField, ExerciseShape

DEFAULT_CATEGORY = ExerciseCategory.UPPER_BODY_PUSH

# Display order of category tiles
CATEGORY_ORDER = list(ExerciseCategory)

# Epley: 1RM = weight * (1 + reps / EPLEY_DIVISOR)
EPLEY_DIVISOR = 30

# Accepted field combinations. Anything else is rejected at definition time.
SHAPE_BY_FIELDS: dict[frozenset[ExerciseField], ExerciseShape] = {
    frozenset({ExerciseField.WEIGHT, ExerciseField.REPS}): ExerciseShape.WEIGHT_REPS,
    frozenset({ExerciseField.WEIGHT, ExerciseField.DURATION}): ExerciseShape.WEIGHT_DURATION,
    frozenset({ExerciseField.REPS}): ExerciseShape.REPS_ONLY,
    frozenset({ExerciseField.DURATION}): ExerciseShape.DURATION_ONLY,
    frozenset({ExerciseField.DISTANCE}): ExerciseShape.DISTANCE_DURATION,
    frozenset({ExerciseField.DISTANCE, ExerciseField.DURATION}): ExerciseShape.DISTANCE_DURATION,
}

# Shapes logged as one combined row (no "add set")
SINGLE_ROW_SHAPES = frozenset({ExerciseShape.DISTANCE_DURATION})
