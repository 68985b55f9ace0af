from datetime import datetime, timedelta, timezone

import pytest

from fittrack.db import as_utc
from fittrack.errors import ConflictError, NotFound, ValidationError
from fittrack.services import PlanComposer, SessionLifecycle

T0 = datetime(2026, 10, 14, 18, 0, tzinfo=timezone.utc)


class FakeClock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(T0)


@pytest.fixture
def lifecycle(db, clock):
    return SessionLifecycle(db, clock=clock)


@pytest.fixture
def planned(db, make_user, make_exercise):
    """A user with a two-exercise plan."""
    u = make_user()
    composer = PlanComposer(db)
    plan = composer.create_plan(u.id, name="Push", day_of_week=3, muscle_groups=["Chest"], estimated_duration=60)
    bench, dips = make_exercise("Bench", ["Chest"]), make_exercise("Dips", ["Triceps"])
    composer.add_exercise(plan.id, bench.id, sets=4, reps=8, weight=60.0)
    composer.add_exercise(plan.id, dips.id, sets=3, reps=12)
    return u, plan, bench, dips


def test_start_seeds_logs_from_plan(lifecycle, planned):
    u, plan, bench, dips = planned
    s = lifecycle.start(u.id, plan_id=plan.id)
    assert s.name == "Push"
    assert s.state == "in_progress" and s.end_time is None and s.is_completed is False
    assert as_utc(s.start_time) == T0
    logs = lifecycle.list_logs(s.id)
    assert [(l.exercise_id, l.sets, l.reps, l.weight, l.order) for l in logs] == [
        (bench.id, 4, 8, 60.0, 0),
        (dips.id, 3, 12, None, 1),
    ]
    assert not any(l.is_completed for l in logs)


def test_seeded_logs_are_a_snapshot(db, lifecycle, planned):
    u, plan, _, _ = planned
    s = lifecycle.start(u.id, plan_id=plan.id)
    composer = PlanComposer(db)
    first = composer.list_for_plan(plan.id)[0].entry
    composer.update_entry(plan.id, first.id, {"sets": 10})
    assert lifecycle.list_logs(s.id)[0].sets == 4


def test_start_without_plan_needs_a_name(lifecycle, make_user):
    u = make_user()
    with pytest.raises(ValidationError) as exc:
        lifecycle.start(u.id)
    assert exc.value.field == "name"
    s = lifecycle.start(u.id, name="Evening run", notes="easy pace")
    assert s.workout_plan_id is None and s.notes == "easy pace"
    assert lifecycle.list_logs(s.id) == []


def test_start_with_foreign_plan_is_rejected(lifecycle, planned, make_user):
    _, plan, _, _ = planned
    stranger = make_user()
    with pytest.raises(ValidationError) as exc:
        lifecycle.start(stranger.id, plan_id=plan.id)
    assert exc.value.field == "workout_plan_id"


def test_start_missing_user_or_plan(lifecycle, make_user):
    with pytest.raises(NotFound):
        lifecycle.start(999999, name="x")
    with pytest.raises(NotFound):
        lifecycle.start(make_user().id, plan_id=999999)


def test_finish_completes_once(lifecycle, clock, planned):
    u, plan, _, _ = planned
    s = lifecycle.start(u.id, plan_id=plan.id)
    clock.now = T0 + timedelta(minutes=55)
    done = lifecycle.finish(s.id, is_completed=True, notes="felt strong")
    assert done.state == "completed"
    assert as_utc(done.end_time) == T0 + timedelta(minutes=55)
    assert done.notes == "felt strong"

    clock.now = T0 + timedelta(hours=3)
    with pytest.raises(ConflictError) as exc:
        lifecycle.finish(s.id, is_completed=False)
    assert exc.value.state == "completed"
    again = lifecycle.get(s.id)
    assert again.is_completed is True
    assert as_utc(again.end_time) == T0 + timedelta(minutes=55)


def test_finish_never_ends_before_start(lifecycle, clock, make_user):
    s = lifecycle.start(make_user().id, name="Skewed")
    clock.now = T0 - timedelta(minutes=5)
    done = lifecycle.finish(s.id, is_completed=True)
    assert as_utc(done.end_time) == T0


def test_abandon(lifecycle, make_user):
    s = lifecycle.start(make_user().id, name="Cut short")
    out = lifecycle.abandon(s.id)
    assert out.state == "abandoned" and out.end_time is not None
    with pytest.raises(ConflictError):
        lifecycle.abandon(s.id)


def test_update_log_leaves_session_untouched(lifecycle, planned):
    u, plan, _, _ = planned
    s = lifecycle.start(u.id, plan_id=plan.id)
    first = lifecycle.list_logs(s.id)[0]
    updated = lifecycle.update_log(first.id, {"is_completed": True, "weight": 62.5})
    assert updated.is_completed is True and updated.weight == 62.5
    session = lifecycle.get(s.id)
    assert session.state == "in_progress" and session.is_completed is False


def test_update_log_rejects_structural_fields(lifecycle, planned):
    u, plan, _, dips = planned
    s = lifecycle.start(u.id, plan_id=plan.id)
    first = lifecycle.list_logs(s.id)[0]
    with pytest.raises(ValidationError):
        lifecycle.update_log(first.id, {"exercise_id": dips.id})
    with pytest.raises(ValidationError):
        lifecycle.update_log(first.id, {"reps": 0})


def test_writes_after_end_conflict(lifecycle, planned, make_exercise):
    u, plan, _, _ = planned
    s = lifecycle.start(u.id, plan_id=plan.id)
    first = lifecycle.list_logs(s.id)[0]
    lifecycle.finish(s.id, is_completed=True)
    with pytest.raises(ConflictError):
        lifecycle.update_log(first.id, {"is_completed": True})
    with pytest.raises(ConflictError):
        lifecycle.log_exercise(s.id, make_exercise().id, sets=1, reps=1)
    with pytest.raises(ConflictError):
        lifecycle.update_details(s.id, {"notes": "late edit"})
    assert lifecycle.list_logs(s.id)[0].is_completed is False


def test_log_exercise_ordering(lifecycle, make_user, make_exercise):
    s = lifecycle.start(make_user().id, name="Freestyle")
    a, b, c = make_exercise("LA"), make_exercise("LB"), make_exercise("LC")
    lifecycle.log_exercise(s.id, a.id, sets=3, reps=10)
    lifecycle.log_exercise(s.id, b.id, sets=3, reps=10)
    lifecycle.log_exercise(s.id, c.id, sets=3, reps=10, order=0)
    logs = lifecycle.list_logs(s.id)
    assert [l.exercise_id for l in logs] == [c.id, a.id, b.id]
    assert [l.order for l in logs] == [0, 1, 2]


def test_update_details(lifecycle, make_user):
    s = lifecycle.start(make_user().id, name="Morning")
    out = lifecycle.update_details(s.id, {"name": "  Morning lift ", "notes": "gym B"})
    assert (out.name, out.notes) == ("Morning lift", "gym B")
    with pytest.raises(ValidationError):
        lifecycle.update_details(s.id, {"is_completed": True})


def test_start_time_from_offset_clock_is_stored_as_utc(db, make_user):
    plus_two = timezone(timedelta(hours=2))
    lifecycle = SessionLifecycle(db, clock=lambda: datetime(2026, 10, 14, 20, 0, tzinfo=plus_two))
    s = lifecycle.start(make_user().id, name="Offset")
    assert as_utc(lifecycle.get(s.id).start_time) == datetime(2026, 10, 14, 18, 0, tzinfo=timezone.utc)
