"""Exercise schemas."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from liftlog.core.enums import ExerciseCategory, ExerciseField, ExerciseShape
from liftlog.services.shapes import normalize_fields, shape_for_fields


class ExerciseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: ExerciseCategory
    fields: list[ExerciseField] = Field(..., min_length=1)
    primary_muscles: list[str] = []
    secondary_muscles: list[str] = []
    major_muscle_group: str = Field(default="", max_length=100)
    icon_url: str | None = None


class ExerciseCreate(ExerciseBase):
    @field_validator("name", "major_muscle_group")
    @classmethod
    def _strip(cls, v: str) -> str:
        return v.strip()

    @field_validator("fields")
    @classmethod
    def _known_shape(cls, v: list[ExerciseField]) -> list[ExerciseField]:
        shape_for_fields(v)  # ValueError -> 422
        return normalize_fields(v)


class ExerciseRead(ExerciseBase):
    model_config = ConfigDict(from_attributes=True)
    shape: ExerciseShape
