import os
from datetime import datetime, timezone

# Must be set before liftlog.core.config caches its settings.
os.environ["DATABASE_DSN"] = "sqlite+aiosqlite://"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from liftlog.core.enums import ExerciseCategory, ExerciseField
from liftlog.db.base import Base
from liftlog.db.session import get_db
from liftlog.main import app
from liftlog.models import *  # noqa: F401, F403 - register all models
from liftlog.schemas.exercise import ExerciseCreate
from liftlog.services import catalog


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session_maker(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'liftlog.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


BENCH = ExerciseCreate(
    name="Bench Press",
    category=ExerciseCategory.UPPER_BODY_PUSH,
    fields=[ExerciseField.WEIGHT, ExerciseField.REPS],
    primary_muscles=["Chest"],
    major_muscle_group="Chest",
)
RUN = ExerciseCreate(
    name="Run",
    category=ExerciseCategory.CARDIO,
    fields=[ExerciseField.DISTANCE, ExerciseField.DURATION],
    major_muscle_group="Legs",
)
PLANK = ExerciseCreate(
    name="Plank",
    category=ExerciseCategory.CORE_STABILITY,
    fields=[ExerciseField.DURATION],
    major_muscle_group="Core",
)
SQUAT = ExerciseCreate(
    name="Squat",
    category=ExerciseCategory.LOWER_BODY,
    fields=[ExerciseField.WEIGHT, ExerciseField.REPS],
    major_muscle_group="Legs",
)


@pytest_asyncio.fixture
async def library(db):
    """Bench, run, plank and squat in the catalog."""
    for payload in (BENCH, RUN, PLANK, SQUAT):
        await catalog.create_exercise(db, payload)
    return db


@pytest.fixture
def exercise_json():
    return {
        "name": "Deadlift",
        "category": "Lower Body",
        "fields": ["reps", "weight"],
        "primary_muscles": ["Hamstrings", "Glutes"],
        "secondary_muscles": ["Back"],
        "major_muscle_group": "Legs",
    }
