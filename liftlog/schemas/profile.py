"""User profile (aggregate statistics) schemas. JSON uses camelCase keys."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class OneRepMaxRecord(_CamelModel):
    estimated_max: float
    reps_at_max: int
    achieved_on: datetime


class UserAggregates(_CamelModel):
    """Derived per-user stats. Maps are keyed by category value / exercise name."""

    last_worked_by_category: dict[str, datetime] = {}
    last_worked_by_exercise: dict[str, datetime] = {}
    one_rep_max_by_exercise: dict[str, OneRepMaxRecord] = {}


class UserProfileRead(UserAggregates):
    user_id: str
    version: int


class ExerciseSummary(_CamelModel):
    """What the entry form shows for the selected exercise."""

    exercise: str
    category: str | None = None
    category_last_worked: datetime | None = None
    category_last_worked_ago: str | None = None
    exercise_last_worked: datetime | None = None
    exercise_last_worked_ago: str | None = None
    one_rep_max: int | None = None  # rounded for display
    one_rep_max_reps: int | None = None
    one_rep_max_ago: str | None = None
