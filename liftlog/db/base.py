"""SQLAlchemy declarative base and metadata."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base for all ORM models.

    Document-shaped columns (set lists, aggregate maps) map to JSONB on PostgreSQL
    and plain JSON elsewhere; datetimes are always timezone-aware.
    """

    type_annotation_map = {
        dict[str, Any]: JSON().with_variant(JSONB, "postgresql"),
        list[Any]: JSON().with_variant(JSONB, "postgresql"),
        datetime: DateTime(timezone=True),
    }
