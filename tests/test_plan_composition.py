import pytest

from fittrack.errors import ConflictError, NotFound, ValidationError
from fittrack.services import PlanComposer, SessionLifecycle


@pytest.fixture
def composer(db):
    return PlanComposer(db)


@pytest.fixture
def plan(composer, make_user):
    u = make_user()
    return composer.create_plan(
        u.id, name="Leg Day", day_of_week=1, muscle_groups=["Legs"], estimated_duration=45
    )


def _names(composer, plan_id):
    return [pe.exercise.name for pe in composer.list_for_plan(plan_id)]


def _orders(composer, plan_id):
    return [pe.entry.order for pe in composer.list_for_plan(plan_id)]


def test_entries_returned_by_order_not_insertion(composer, plan, make_exercise):
    a, b, c = make_exercise("A1"), make_exercise("B1"), make_exercise("C1")
    composer.add_exercise(plan.id, a.id, sets=3, reps=10, order=2)
    composer.add_exercise(plan.id, b.id, sets=3, reps=10, order=0)
    composer.add_exercise(plan.id, c.id, sets=3, reps=10, order=1)
    # A clamps to 0, B shifts it right, C lands between
    assert _names(composer, plan.id) == ["B1", "C1", "A1"]
    assert _orders(composer, plan.id) == [0, 1, 2]


def test_append_when_order_missing(composer, plan, make_exercise):
    first, second = make_exercise("First"), make_exercise("Second")
    e1 = composer.add_exercise(plan.id, first.id, sets=4, reps=8)
    e2 = composer.add_exercise(plan.id, second.id, sets=4, reps=8)
    assert (e1.order, e2.order) == (0, 1)


def test_insert_at_occupied_position_shifts_right(composer, plan, make_exercise):
    for name in ("S1", "S2", "S3"):
        composer.add_exercise(plan.id, make_exercise(name).id, sets=3, reps=12)
    composer.add_exercise(plan.id, make_exercise("New").id, sets=3, reps=12, order=1)
    assert _names(composer, plan.id) == ["S1", "New", "S2", "S3"]
    assert _orders(composer, plan.id) == [0, 1, 2, 3]


def test_entry_keeps_prescription(composer, plan, make_exercise):
    squat = make_exercise("Squat", ["Legs", "Glutes"])
    entry = composer.add_exercise(plan.id, squat.id, sets=5, reps=5, weight=100.0, rest_time=180)
    [pe] = composer.list_for_plan(plan.id)
    assert pe.entry.id == entry.id
    assert (pe.entry.sets, pe.entry.reps, pe.entry.weight, pe.entry.rest_time) == (5, 5, 100.0, 180)
    assert pe.exercise.muscle_groups == ["Legs", "Glutes"]


def test_add_exercise_rejects_bad_values(composer, plan, make_exercise):
    ex = make_exercise()
    with pytest.raises(ValidationError) as exc:
        composer.add_exercise(plan.id, ex.id, sets=0, reps=10)
    assert exc.value.field == "sets"
    with pytest.raises(ValidationError):
        composer.add_exercise(plan.id, ex.id, sets=3, reps=10, weight=-5)
    with pytest.raises(ValidationError):
        composer.add_exercise(plan.id, ex.id, sets=3, reps=10, order=-1)
    assert composer.list_for_plan(plan.id) == []


def test_add_exercise_missing_references(composer, plan):
    with pytest.raises(NotFound) as exc:
        composer.add_exercise(plan.id, 999999, sets=3, reps=10)
    assert exc.value.entity == "Exercise"
    with pytest.raises(NotFound):
        composer.add_exercise(999999, 1, sets=3, reps=10)


def test_reorder(composer, plan, make_exercise):
    ids = [composer.add_exercise(plan.id, make_exercise(n).id, sets=3, reps=10).id for n in ("R1", "R2", "R3")]
    result = composer.reorder(plan.id, [ids[2], ids[0], ids[1]])
    assert [pe.exercise.name for pe in result] == ["R3", "R1", "R2"]
    assert [pe.entry.order for pe in result] == [0, 1, 2]


def test_reorder_requires_every_entry_once(composer, plan, make_exercise):
    ids = [composer.add_exercise(plan.id, make_exercise(n).id, sets=3, reps=10).id for n in ("Q1", "Q2")]
    with pytest.raises(ValidationError):
        composer.reorder(plan.id, [ids[0]])
    with pytest.raises(ValidationError):
        composer.reorder(plan.id, [ids[0], ids[0]])
    assert _names(composer, plan.id) == ["Q1", "Q2"]


def test_remove_closes_the_gap(composer, plan, make_exercise):
    ids = [composer.add_exercise(plan.id, make_exercise(n).id, sets=3, reps=10).id for n in ("D1", "D2", "D3")]
    composer.remove(plan.id, ids[0])
    assert _names(composer, plan.id) == ["D2", "D3"]
    assert _orders(composer, plan.id) == [0, 1]


def test_entry_of_other_plan_is_not_found(composer, plan, make_user, make_exercise):
    other = composer.create_plan(
        make_user().id, name="Other", day_of_week=1, muscle_groups=["Back"], estimated_duration=30
    )
    entry = composer.add_exercise(other.id, make_exercise().id, sets=3, reps=10)
    with pytest.raises(NotFound):
        composer.update_entry(plan.id, entry.id, {"sets": 5})
    with pytest.raises(NotFound):
        composer.remove(plan.id, entry.id)


def test_update_entry_partial(composer, plan, make_exercise):
    entry = composer.add_exercise(plan.id, make_exercise().id, sets=3, reps=10, weight=20.0)
    updated = composer.update_entry(plan.id, entry.id, {"reps": 12})
    assert (updated.sets, updated.reps, updated.weight) == (3, 12, 20.0)
    with pytest.raises(ValidationError):
        composer.update_entry(plan.id, entry.id, {"order": 4})


def test_one_active_plan_per_day(composer, plan):
    with pytest.raises(ConflictError) as exc:
        composer.create_plan(
            plan.user_id, name="Dup", day_of_week=1, muscle_groups=["Core"], estimated_duration=20
        )
    assert exc.value.field == "day_of_week"
    inactive = composer.create_plan(
        plan.user_id, name="Spare", day_of_week=1, muscle_groups=["Core"], estimated_duration=20, is_active=False
    )
    with pytest.raises(ConflictError):
        composer.update_plan(inactive.id, {"is_active": True})
    moved = composer.update_plan(inactive.id, {"is_active": True, "day_of_week": 2})
    assert (moved.day_of_week, moved.is_active) == (2, True)


def test_seed_default_week(composer, make_user):
    u = make_user()
    plans = composer.seed_default_week(u.id)
    assert [p.day_of_week for p in plans] == [0, 1, 2, 4, 5]
    assert plans[0].name == "Sunday - Chest & Triceps"
    assert plans[0].muscle_groups == ["Chest", "Triceps"]
    assert all(p.estimated_duration == 60 for p in plans)
    # nothing left to seed
    assert composer.seed_default_week(u.id) == []


def test_seed_default_week_skips_planned_days(composer, make_user):
    u = make_user()
    composer.create_plan(u.id, name="Mine", day_of_week=0, muscle_groups=["Cardio"], estimated_duration=30)
    days = [p.day_of_week for p in composer.seed_default_week(u.id)]
    assert days == [1, 2, 4, 5]


def test_delete_plan_cascades_entries(db, composer, plan, make_exercise):
    entry = composer.add_exercise(plan.id, make_exercise().id, sets=3, reps=10)
    composer.delete_plan(plan.id)
    db.expire_all()
    assert composer.plans.get(plan.id) is None
    assert composer.entries.get(entry.id) is None


def test_delete_plan_with_sessions_is_refused(db, composer, plan):
    SessionLifecycle(db).start(plan.user_id, plan_id=plan.id)
    with pytest.raises(ConflictError) as exc:
        composer.delete_plan(plan.id)
    assert exc.value.state == "referenced"
    assert composer.plans.get(plan.id) is not None
