"""Seed the workout library and muscle groups from JSON files.

Idempotent: rows are matched by name, existing names are skipped.

    python scripts/seed_library.py [exercises.json] [muscleGroups.json]
"""

import asyncio
import json
import os
import sys

# Add parent directory to path so we can import liftlog modules
sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from pydantic import ValidationError
from liftlog.db.session import async_session_maker, engine
from liftlog.models.muscle_group import MuscleGroup
from liftlog.schemas.exercise import ExerciseCreate
from liftlog.services import catalog

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


def _load(path: str) -> list[dict]:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


async def seed(exercises_path: str, muscle_groups_path: str) -> None:
    async with async_session_maker() as session:
        existing = {m.name for m in await catalog.list_muscle_groups(session)}
        for item in _load(muscle_groups_path):
            name = item["name"].strip()
            if name in existing:
                continue
            session.add(MuscleGroup(name=name))
            existing.add(name)
            print(f"Added muscle group: {name}")
        await session.commit()

        for item in _load(exercises_path):
            try:
                payload = ExerciseCreate.model_validate(item)
            except ValidationError as e:
                print(f"Skipping {item.get('name')!r}: {e.error_count()} validation error(s)")
                continue
            if await catalog.get_exercise(session, payload.name) is not None:
                continue
            await catalog.create_exercise(session, payload)
            print(f"Added exercise: {payload.name} ({payload.category.value})")
    await engine.dispose()
    print("Seed complete.")


if __name__ == "__main__":
    args = sys.argv[1:]
    exercises_file = args[0] if len(args) > 0 else os.path.join(DATA_DIR, "exercises.json")
    muscle_groups_file = args[1] if len(args) > 1 else os.path.join(DATA_DIR, "muscleGroups.json")
    asyncio.run(seed(exercises_file, muscle_groups_file))
