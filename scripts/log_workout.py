"""Log a workout entry from the command line through the entry form controller.

    python scripts/log_workout.py --user u1 "Bench Press" --set weight=135,reps=5 --set weight=135,reps=4
    python scripts/log_workout.py --user u1 "Sled Push" --new --fields distance,duration \\
        --muscle-group Legs --category "Lower Body" --set distance=50,duration=30
"""

import argparse
import asyncio
import os
import sys

sys.path.append(os.path.join(os.path.dirname(__file__), ".."))

from liftlog.core.config import get_settings
from liftlog.core.enums import ExerciseCategory
from liftlog.db.session import async_session_maker, engine
from liftlog.services import profiles
from liftlog.services.form_backend import load_controller
from liftlog.services.summaries import exercise_summary


def _parse_set(raw: str) -> dict[str, str]:
    pairs = (item.split("=", 1) for item in raw.split(",") if item)
    return {k.strip(): v.strip() for k, v in pairs}


async def main(args: argparse.Namespace) -> int:
    try:
        return await log_entry(args)
    finally:
        await engine.dispose()


async def log_entry(args: argparse.Namespace) -> int:
    settings = get_settings()
    async with async_session_maker() as session:
        form = await load_controller(session, settings, args.user)
        if args.new:
            form.select_category(args.category)
            form.define_new_exercise()
            form.new_exercise_name = args.exercise
            form.new_exercise_muscle_group = args.muscle_group
            form.set_new_exercise_fields(args.fields.split(","))
        else:
            form.select_exercise(args.exercise, prefill=args.prefill)

        for i, raw in enumerate(args.set or []):
            if i > 0 and not form.add_set():
                print(f"{args.exercise} is logged as a single row; extra --set ignored")
                break
            for field, value in _parse_set(raw).items():
                form.set_field(i, field, value)

        entry = await form.submit()
        if entry is None:
            print("Nothing logged: fill every input the exercise needs.")
            return 1
        print(f"Logged {entry.exercise} at {entry.date.isoformat()}: {[s.as_dict() for s in entry.sets]}")

        if args.user:
            aggregates = await profiles.get_aggregates(session, args.user)
            category = form.exercises[entry.exercise].category.value
            summary = exercise_summary(aggregates, entry.exercise, category)
            if summary.one_rep_max is not None:
                print(f"1RM: {summary.one_rep_max} ({summary.one_rep_max_reps} reps, {summary.one_rep_max_ago})")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("exercise")
    parser.add_argument("--user", help="user id; omit to log anonymously (no stats)")
    parser.add_argument("--set", action="append", help="comma-separated field=value pairs, one per set")
    parser.add_argument("--prefill", action="store_true", help="start from the last logged set")
    parser.add_argument("--new", action="store_true", help="define the exercise first")
    parser.add_argument("--fields", default="weight,reps")
    parser.add_argument("--muscle-group", default="")
    parser.add_argument(
        "--category",
        default=ExerciseCategory.UPPER_BODY_PUSH.value,
        choices=[c.value for c in ExerciseCategory],
    )
    sys.exit(asyncio.run(main(parser.parse_args())))
