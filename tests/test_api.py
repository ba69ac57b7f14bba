from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from liftlog.models.muscle_group import MuscleGroup
from liftlog.models.user_profile import UserProfile
from liftlog.services import profiles

API = "/api/v1"


@pytest.mark.asyncio
async def test_root_and_health(client):
    assert (await client.get("/")).json()["status"] == "ok"
    r = await client.get(f"{API}/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_readiness_reports_catalog_size(client, library):
    r = await client.get(f"{API}/health/ready")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "database": "connected", "exercises": 4}


@pytest.mark.asyncio
async def test_create_exercise(client, exercise_json):
    r = await client.post(f"{API}/exercises", json=exercise_json)
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Deadlift"
    assert data["fields"] == ["weight", "reps"]
    assert data["shape"] == "weight_reps"

    r = await client.get(f"{API}/exercises/Deadlift")
    assert r.status_code == 200
    assert r.json()["primary_muscles"] == ["Hamstrings", "Glutes"]


@pytest.mark.asyncio
async def test_duplicate_exercise_is_409(client, exercise_json):
    assert (await client.post(f"{API}/exercises", json=exercise_json)).status_code == 201
    exercise_json["category"] = "Full Body/Functional"
    r = await client.post(f"{API}/exercises", json=exercise_json)
    assert r.status_code == 409
    assert "Deadlift" in r.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize("fields", [[], ["weight"], ["weight", "reps", "distance"], ["pace"]])
async def test_unsupported_fields_are_422(client, exercise_json, fields):
    exercise_json["fields"] = fields
    r = await client.post(f"{API}/exercises", json=exercise_json)
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_exercises_listed_in_tile_order(client, library):
    r = await client.get(f"{API}/exercises")
    assert [e["name"] for e in r.json()] == ["Bench Press", "Squat", "Plank", "Run"]

    r = await client.get(f"{API}/exercises", params={"category": "Cardio"})
    assert [e["name"] for e in r.json()] == ["Run"]


@pytest.mark.asyncio
async def test_unknown_exercise_is_404(client):
    assert (await client.get(f"{API}/exercises/Curl")).status_code == 404


@pytest.mark.asyncio
async def test_muscle_groups_sorted(client, db):
    db.add_all([MuscleGroup(name="Legs"), MuscleGroup(name="Chest"), MuscleGroup(name="Back")])
    await db.commit()
    r = await client.get(f"{API}/muscle-groups")
    assert [m["name"] for m in r.json()] == ["Back", "Chest", "Legs"]


@pytest.mark.asyncio
async def test_log_updates_profile(client, library):
    r = await client.post(
        f"{API}/logs",
        json={
            "user_id": "u1",
            "exercise": "Bench Press",
            "sets": [{"weight": 135, "reps": 5}, {"weight": 115, "reps": 8}],
            "date": "2025-03-01T18:00:00Z",
        },
    )
    assert r.status_code == 201
    assert r.json()["sets"] == [
        {"weight": 135.0, "reps": 5},
        {"weight": 115.0, "reps": 8},
    ]

    r = await client.get(f"{API}/profiles/u1")
    assert r.status_code == 200
    profile = r.json()
    assert profile["userId"] == "u1"
    assert profile["version"] == 1
    record = profile["oneRepMaxByExercise"]["Bench Press"]
    assert record["estimatedMax"] == pytest.approx(157.5)
    assert record["repsAtMax"] == 5
    assert set(profile["lastWorkedByCategory"]) == {"Upper Body Push"}
    assert set(profile["lastWorkedByExercise"]) == {"Bench Press"}


@pytest.mark.asyncio
async def test_anonymous_log_has_no_profile(client, library):
    r = await client.post(f"{API}/logs", json={"exercise": "Plank", "sets": [{"duration": 60}]})
    assert r.status_code == 201
    assert r.json()["user_id"] is None
    profile_count = (await library.execute(select(func.count()).select_from(UserProfile))).scalar_one()
    assert profile_count == 0


@pytest.mark.asyncio
async def test_log_against_unknown_exercise_is_404(client, library):
    r = await client.post(
        f"{API}/logs", json={"user_id": "u1", "exercise": "Curl", "sets": [{"weight": 30, "reps": 10}]}
    )
    assert r.status_code == 404
    assert (await client.get(f"{API}/logs")).json() == []


@pytest.mark.asyncio
async def test_undeclared_set_field_is_422(client, library):
    r = await client.post(
        f"{API}/logs", json={"user_id": "u1", "exercise": "Run", "sets": [{"weight": 30, "reps": 10}]}
    )
    assert r.status_code == 422
    r = await client.post(f"{API}/logs", json={"exercise": "Run", "sets": [{"pace": 8}]})
    assert r.status_code == 422
    r = await client.post(f"{API}/logs", json={"exercise": "Run", "sets": []})
    assert r.status_code == 422


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exercise, sets",
    [
        ("Bench Press", [{}]),
        ("Bench Press", [{"reps": 5}]),
        ("Bench Press", [{"weight": 135, "reps": 5}, {"weight": 135}]),
        ("Plank", [{"duration": 0}]),
        ("Run", [{}]),
    ],
)
async def test_incomplete_sets_are_422(client, library, exercise, sets):
    r = await client.post(f"{API}/logs", json={"user_id": "u1", "exercise": exercise, "sets": sets})
    assert r.status_code == 422
    assert (await client.get(f"{API}/logs")).json() == []
    assert (await client.get(f"{API}/profiles/u1")).status_code == 404


@pytest.mark.asyncio
async def test_edit_with_incomplete_set_is_422(client, library):
    created = (
        await client.post(
            f"{API}/logs",
            json={"user_id": "u1", "exercise": "Bench Press", "sets": [{"weight": 135, "reps": 5}]},
        )
    ).json()

    r = await client.put(f"{API}/logs/{created['id']}", json={"exercise": "Bench Press", "sets": [{"reps": 8}]})
    assert r.status_code == 422

    logs = (await client.get(f"{API}/logs")).json()
    assert logs[0]["sets"] == [{"weight": 135.0, "reps": 5}]
    assert (await client.get(f"{API}/profiles/u1")).json()["version"] == 1


@pytest.mark.asyncio
async def test_overflowing_estimate_is_not_recorded(client, library):
    r = await client.post(
        f"{API}/logs",
        json={"user_id": "u1", "exercise": "Bench Press", "sets": [{"weight": 1e308, "reps": 30}]},
    )
    assert r.status_code == 201

    profile = (await client.get(f"{API}/profiles/u1")).json()
    assert profile["oneRepMaxByExercise"] == {}
    assert set(profile["lastWorkedByExercise"]) == {"Bench Press"}


@pytest.mark.asyncio
async def test_log_response_sets_are_sparse(client, library):
    r = await client.post(f"{API}/logs", json={"exercise": "Run", "sets": [{"distance": 3.1}]})
    assert r.json()["sets"] == [{"distance": 3.1}]
    assert (await client.get(f"{API}/logs")).json()[0]["sets"] == [{"distance": 3.1}]


@pytest.mark.asyncio
async def test_list_logs_newest_first(client, library):
    for day in (1, 3, 2):
        await client.post(
            f"{API}/logs",
            json={
                "user_id": "u1",
                "exercise": "Squat",
                "sets": [{"weight": 200 + day, "reps": 5}],
                "date": f"2025-03-0{day}T12:00:00Z",
            },
        )
    await client.post(f"{API}/logs", json={"user_id": "u2", "exercise": "Plank", "sets": [{"duration": 30}]})

    r = await client.get(f"{API}/logs", params={"user_id": "u1"})
    assert [e["sets"][0]["weight"] for e in r.json()] == [203.0, 202.0, 201.0]
    assert len((await client.get(f"{API}/logs")).json()) == 4


@pytest.mark.asyncio
async def test_edit_replaces_sets_and_refreshes_date(client, library):
    created = (
        await client.post(
            f"{API}/logs",
            json={
                "user_id": "u1",
                "exercise": "Bench Press",
                "sets": [{"weight": 135, "reps": 5}],
                "date": "2025-03-01T18:00:00Z",
            },
        )
    ).json()

    r = await client.put(
        f"{API}/logs/{created['id']}",
        json={"exercise": "Bench Press", "sets": [{"weight": 155, "reps": 5}]},
    )
    assert r.status_code == 200
    edited = r.json()
    assert edited["id"] == created["id"]
    assert edited["sets"][0]["weight"] == 155.0
    assert edited["date"] != created["date"]

    profile = (await client.get(f"{API}/profiles/u1")).json()
    assert profile["version"] == 2
    assert profile["oneRepMaxByExercise"]["Bench Press"]["estimatedMax"] == pytest.approx(155 * (1 + 5 / 30))


@pytest.mark.asyncio
async def test_edit_unknown_entry_is_404(client, library):
    r = await client.put(
        f"{API}/logs/00000000-0000-0000-0000-000000000000",
        json={"exercise": "Bench Press", "sets": [{"weight": 155, "reps": 5}]},
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_summary_for_entry_form(client, library):
    three_days_ago = datetime.now(timezone.utc) - timedelta(days=3)
    await client.post(
        f"{API}/logs",
        json={
            "user_id": "u1",
            "exercise": "Bench Press",
            "sets": [{"weight": 135, "reps": 5}],
            "date": three_days_ago.isoformat(),
        },
    )

    r = await client.get(f"{API}/profiles/u1/summary", params={"exercise": "Bench Press"})
    assert r.status_code == 200
    summary = r.json()
    assert summary["category"] == "Upper Body Push"
    assert summary["categoryLastWorkedAgo"] == "3 days ago"
    assert summary["exerciseLastWorkedAgo"] == "3 days ago"
    assert summary["oneRepMax"] == 158
    assert summary["oneRepMaxReps"] == 5

    r = await client.get(f"{API}/profiles/u1/summary", params={"exercise": "Squat"})
    assert r.json()["oneRepMax"] is None
    assert r.json()["exerciseLastWorkedAgo"] is None
    assert r.json()["categoryLastWorkedAgo"] is None

    r = await client.get(f"{API}/profiles/u1/summary", params={"exercise": "Curl"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_rebuild_from_history(client, library):
    for day, weight in ((2, 225), (1, 185)):
        await client.post(
            f"{API}/logs",
            json={
                "user_id": "u1",
                "exercise": "Squat",
                "sets": [{"weight": weight, "reps": 5}],
                "date": f"2025-03-0{day}T12:00:00Z",
            },
        )
    # overwrite policy: the backfilled entry moved last-worked back to day 1
    before = (await client.get(f"{API}/profiles/u1")).json()
    assert before["lastWorkedByExercise"]["Squat"].startswith("2025-03-01")

    r = await client.post(f"{API}/profiles/u1/rebuild")
    assert r.status_code == 200
    rebuilt = r.json()
    assert rebuilt["lastWorkedByExercise"]["Squat"].startswith("2025-03-02")
    assert rebuilt["oneRepMaxByExercise"]["Squat"]["estimatedMax"] == pytest.approx(262.5)

    after = (await client.get(f"{API}/profiles/u1")).json()
    assert after["version"] == before["version"] + 1


@pytest.mark.asyncio
async def test_aggregate_failure_keeps_the_log(client, library, monkeypatch):
    async def broken(*args, **kwargs):
        raise OperationalError("UPDATE user_profiles", {}, Exception("database is locked"))

    monkeypatch.setattr(profiles, "record_entry", broken)

    r = await client.post(
        f"{API}/logs", json={"user_id": "u1", "exercise": "Bench Press", "sets": [{"weight": 135, "reps": 5}]}
    )
    assert r.status_code == 201
    assert len((await client.get(f"{API}/logs", params={"user_id": "u1"})).json()) == 1
    assert (await client.get(f"{API}/profiles/u1")).status_code == 404
