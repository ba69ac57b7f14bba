"""ORM models - import all so Base.metadata is complete for migrations."""

from liftlog.models.exercise import Exercise
from liftlog.models.muscle_group import MuscleGroup
from liftlog.models.user_profile import UserProfile
from liftlog.models.workout import WorkoutLog

__all__ = [
    "Exercise",
    "MuscleGroup",
    "UserProfile",
    "WorkoutLog",
]
