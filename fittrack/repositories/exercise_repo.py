from __future__ import annotations
from typing import Any, Mapping, Optional

from sqlalchemy import select, func

from fittrack.errors import NotFound
from fittrack.models import Exercise, User
from fittrack.repositories.base import BaseRepository
from fittrack.validators import clean_muscle_groups, require_text


class ExerciseRepository(BaseRepository[Exercise]):
    model = Exercise
    entity_name = "Exercise"
    immutable_fields = frozenset({"id", "created_at", "created_by", "is_custom"})

    def list(self, *, search: Optional[str] = None, muscle_group: Optional[str] = None) -> list[Exercise]:
        stmt = select(Exercise)
        if search:
            stmt = stmt.where(func.lower(Exercise.name).contains(search.strip().lower(), autoescape=True))
        items = self.scalars(stmt.order_by(Exercise.name.asc(), Exercise.id.asc()))
        if muscle_group:
            # JSON containment differs per dialect; the list is small enough to filter here
            wanted = muscle_group.strip().lower()
            items = [e for e in items if wanted in (g.lower() for g in e.muscle_groups or [])]
        return items

    def get_by_name(self, name: str) -> Optional[Exercise]:
        stmt = select(Exercise).where(func.lower(Exercise.name) == name.lower()).limit(1)
        return self.first(stmt)

    def create(
        self,
        *,
        name: str,
        muscle_groups: list[str],
        description: str | None = None,
        instructions: str | None = None,
        image_url: str | None = None,
        video_url: str | None = None,
        is_custom: bool = False,
        created_by: int | None = None,
    ) -> Exercise:
        if created_by is not None and not self.exists(User, created_by):
            raise NotFound("User", created_by)
        ex = Exercise(
            name=require_text(name, "name"),
            muscle_groups=clean_muscle_groups(muscle_groups),
            description=description,
            instructions=instructions,
            image_url=image_url,
            video_url=video_url,
            is_custom=is_custom,
            created_by=created_by,
        )
        return self.save(ex)

    def update(self, exercise_id: int, fields: Mapping[str, Any]) -> Exercise:
        fields = dict(fields)
        if "name" in fields:
            fields["name"] = require_text(fields["name"], "name")
        if "muscle_groups" in fields:
            fields["muscle_groups"] = clean_muscle_groups(fields["muscle_groups"])
        return super().update(exercise_id, fields)
