"""Initial schema: workout_library, muscle_groups, workout_logs, user_profiles.

Revision ID: 001
Revises:
Create Date: 2025-06-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")

CATEGORIES = (
    "Upper Body Push",
    "Upper Body Pull",
    "Lower Body",
    "Core/Stability",
    "Cardio",
    "Full Body/Functional",
)


def upgrade() -> None:
    op.create_table(
        "workout_library",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("category", sa.Enum(*CATEGORIES, name="exercisecategory"), nullable=False),
        sa.Column("fields", JSON, nullable=False),
        sa.Column("primary_muscles", JSON, nullable=False),
        sa.Column("secondary_muscles", JSON, nullable=False),
        sa.Column("major_muscle_group", sa.String(length=100), nullable=False),
        sa.Column("icon_url", sa.String(length=1000), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_library_name"), "workout_library", ["name"], unique=True)

    op.create_table(
        "muscle_groups",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_muscle_groups_name"), "muscle_groups", ["name"], unique=True)

    op.create_table(
        "workout_logs",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(length=128), nullable=True),
        sa.Column("exercise", sa.String(length=255), nullable=False),
        sa.Column("sets", JSON, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["exercise"], ["workout_library.name"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_workout_logs_exercise"), "workout_logs", ["exercise"], unique=False)
    op.create_index("ix_workout_logs_user_date", "workout_logs", ["user_id", "date"], unique=False)

    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("last_worked_by_category", JSON, nullable=False),
        sa.Column("last_worked_by_exercise", JSON, nullable=False),
        sa.Column("one_rep_max_by_exercise", JSON, nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    op.drop_table("user_profiles")
    op.drop_index("ix_workout_logs_user_date", table_name="workout_logs")
    op.drop_index(op.f("ix_workout_logs_exercise"), table_name="workout_logs")
    op.drop_table("workout_logs")
    op.drop_index(op.f("ix_muscle_groups_name"), table_name="muscle_groups")
    op.drop_table("muscle_groups")
    op.drop_index(op.f("ix_workout_library_name"), table_name="workout_library")
    op.drop_table("workout_library")
    sa.Enum(name="exercisecategory").drop(op.get_bind(), checkfirst=True)
