from datetime import datetime, timedelta, timezone

import pytest

from liftlog.schemas.profile import OneRepMaxRecord, UserAggregates
from liftlog.services.summaries import exercise_summary, relative_time

NOW = datetime(2025, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "days, text",
    [
        (0, "today"),
        (1, "1 day ago"),
        (6, "6 days ago"),
        (7, "1 week ago"),
        (13, "1 week ago"),
        (14, "2 weeks ago"),
        (29, "4 weeks ago"),
        (30, "1 month ago"),
        (59, "1 month ago"),
        (60, "2 months ago"),
        (400, "13 months ago"),
    ],
)
def test_relative_time(days, text):
    assert relative_time(NOW - timedelta(days=days, hours=1), NOW) == text


def test_future_and_naive_dates():
    assert relative_time(NOW + timedelta(days=2), NOW) == "today"
    assert relative_time(datetime(2025, 6, 27, 12, 0), NOW) == "3 days ago"


def test_summary_rounds_one_rep_max():
    aggregates = UserAggregates(
        last_worked_by_category={"Upper Body Push": NOW - timedelta(days=2)},
        last_worked_by_exercise={"Bench Press": NOW - timedelta(days=9)},
        one_rep_max_by_exercise={
            "Bench Press": OneRepMaxRecord(
                estimated_max=171.3, reps_at_max=3, achieved_on=NOW - timedelta(days=40)
            )
        },
    )

    summary = exercise_summary(aggregates, "Bench Press", "Upper Body Push", NOW)

    assert summary.category_last_worked_ago == "2 days ago"
    assert summary.exercise_last_worked_ago == "1 week ago"
    assert summary.one_rep_max == 171
    assert summary.one_rep_max_reps == 3
    assert summary.one_rep_max_ago == "1 month ago"


def test_summary_without_history():
    summary = exercise_summary(None, "Plank", "Core/Stability", NOW)
    assert summary.model_dump(exclude_none=True) == {"exercise": "Plank", "category": "Core/Stability"}
    assert "oneRepMax" in summary.model_dump(by_alias=True)


@pytest.mark.parametrize("estimate, shown", [(132.5, 133), (131.5, 132), (157.49, 157), (0.5, 1)])
def test_one_rep_max_rounds_half_up(estimate, shown):
    aggregates = UserAggregates(
        one_rep_max_by_exercise={
            "Bench Press": OneRepMaxRecord(estimated_max=estimate, reps_at_max=30, achieved_on=NOW)
        }
    )
    assert exercise_summary(aggregates, "Bench Press", "Upper Body Push", NOW).one_rep_max == shown
