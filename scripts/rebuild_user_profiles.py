"""Recompute user profiles (last worked, estimated 1RM) from the full log history.

Use after importing old logs or to repair stats left stale by a failed update.

    python scripts/rebuild_user_profiles.py            # every user with logs
    python scripts/rebuild_user_profiles.py USER_ID ...
"""

import asyncio
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from sqlalchemy import distinct, select

from liftlog.core.config import get_settings
from liftlog.db.session import async_session_maker, engine
from liftlog.models.workout import WorkoutLog
from liftlog.services.workout_logs import rebuild_profile


async def main(user_ids: list[str]) -> None:
    settings = get_settings()
    async with async_session_maker() as session:
        if not user_ids:
            result = await session.execute(
                select(distinct(WorkoutLog.user_id)).where(WorkoutLog.user_id.isnot(None))
            )
            user_ids = [row[0] for row in result.all()]
        print(f"Rebuilding {len(user_ids)} profile(s)...")
        for user_id in user_ids:
            aggregates = await rebuild_profile(session, user_id, settings)
            print(
                f"  {user_id}: {len(aggregates.last_worked_by_exercise)} exercises, "
                f"{len(aggregates.one_rep_max_by_exercise)} 1RM records"
            )
    await engine.dispose()
    print("Done.")


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:]))
