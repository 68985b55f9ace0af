"""Built-in exercise library.

Run ``python -m fittrack.seed`` after migrating, or set ``SEED_EXERCISES=true``
to seed on startup. Existing exercises (matched by name) are left alone.
"""
import logging

from sqlalchemy.orm import Session

from fittrack.models import Exercise
from fittrack.repositories import ExerciseRepository
from fittrack.repositories.base import unit_of_work

log = logging.getLogger(__name__)

BUILTIN_EXERCISES = [
    {
        "name": "Bench Press",
        "muscle_groups": ["Chest", "Triceps"],
        "description": "Barbell press from the chest while lying on a flat bench.",
        "instructions": "Lower the bar to mid-chest, pause, press back to lockout.",
    },
    {
        "name": "Shoulder Press",
        "muscle_groups": ["Shoulders", "Triceps"],
        "description": "Overhead press with dumbbells or a barbell.",
        "instructions": "Brace, press overhead until arms are straight, lower under control.",
    },
    {
        "name": "Deadlift",
        "muscle_groups": ["Back", "Legs"],
        "description": "Hip hinge lifting a loaded bar from the floor.",
        "instructions": "Keep the bar close, drive through the floor, stand tall, return the bar.",
    },
    {
        "name": "Squat",
        "muscle_groups": ["Legs", "Glutes"],
        "description": "Barbell back squat.",
        "instructions": "Sit down between the hips to depth, keep the chest up, stand back up.",
    },
    {
        "name": "Pull Up",
        "muscle_groups": ["Back", "Biceps"],
        "description": "Bodyweight vertical pull.",
        "instructions": "From a dead hang, pull until the chin clears the bar.",
    },
    {
        "name": "Plank",
        "muscle_groups": ["Core", "Abs"],
        "description": "Isometric hold on forearms and toes.",
        "instructions": "Keep a straight line from head to heels and hold.",
    },
]


def seed_builtin_exercises(db: Session) -> list[Exercise]:
    repo = ExerciseRepository(db)
    created: list[Exercise] = []
    with unit_of_work(db, "built-in exercises"):
        for fields in BUILTIN_EXERCISES:
            if repo.get_by_name(fields["name"]) is not None:
                continue
            ex = Exercise(**fields, is_custom=False, created_by=None)
            db.add(ex)
            created.append(ex)
    log.info("seeded %d built-in exercises", len(created))
    return created


if __name__ == "__main__":
    from fittrack.db import SessionLocal

    logging.basicConfig(level=logging.INFO)
    with SessionLocal() as session:
        seed_builtin_exercises(session)
