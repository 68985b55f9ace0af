# fittrack/repositories/base.py
from __future__ import annotations
import logging
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, Iterator, Mapping, Optional, TypeVar

from sqlalchemy import inspect
from sqlalchemy.engine import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fittrack.errors import NotFound, StorageError, ValidationError

T = TypeVar("T")  # SQLAlchemy model type

log = logging.getLogger(__name__)


class BaseRepository(Generic[T]):
    """Lightweight base for repositories using SQLAlchemy 2.0 style."""
    model: ClassVar[type]
    entity_name: ClassVar[str] = "Record"
    # never writable through update(); owning FKs belong here too
    immutable_fields: ClassVar[frozenset[str]] = frozenset({"id", "created_at"})

    def __init__(self, db: Session):
        self.db = db

    # READS
    def fetch(self, model: type, entity_id: int) -> Any:
        """``Session.get`` for any model; database failures become StorageError."""
        try:
            return self.db.get(model, entity_id)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to load {model.__name__} {entity_id}") from e

    def get(self, entity_id: int) -> Optional[T]:
        return self.fetch(self.model, entity_id)

    def exists(self, model: type, entity_id: int) -> bool:
        return self.fetch(model, entity_id) is not None

    def require(self, entity_id: int) -> T:
        entity = self.get(entity_id)
        if entity is None:
            raise NotFound(self.entity_name, entity_id)
        return entity

    def execute(self, stmt) -> Result:
        try:
            return self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to query {self.entity_name}") from e

    def scalars(self, stmt) -> list[T]:
        return list(self.execute(stmt).scalars().all())

    def first(self, stmt) -> Optional[T]:
        return self.execute(stmt).scalars().first()

    def one_or_none(self, stmt) -> Any:
        return self.execute(stmt).scalar_one_or_none()

    def scalar(self, stmt) -> Any:
        return self.execute(stmt).scalar_one()

    def refresh(self, *entities: Any) -> None:
        try:
            for entity in entities:
                self.db.refresh(entity)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to reload {self.entity_name}") from e

    # WRITES
    def add_and_refresh(self, entity: T) -> T:
        """Stage an entity and flush it so it gets an id; does not commit."""
        try:
            self.db.add(entity)
            self.db.flush()
            self.db.refresh(entity)
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return entity

    def commit(self, *entities: Any) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("commit failed for %s: %s", self.entity_name, e)
            raise StorageError(f"failed to save {self.entity_name}") from e
        self.refresh(*entities)

    def save(self, entity: T) -> T:
        try:
            self.add_and_refresh(entity)
        except SQLAlchemyError as e:
            raise StorageError(f"failed to save {self.entity_name}") from e
        self.commit(entity)
        return entity

    def update(self, entity_id: int, fields: Mapping[str, Any]) -> T:
        """Partial merge of ``fields``; unknown and immutable fields are rejected."""
        entity = self.require(entity_id)
        columns = {c.key for c in inspect(self.model).column_attrs}
        for key in fields:
            if key in self.immutable_fields:
                raise ValidationError(f"{key} cannot be changed", field=key)
            if key not in columns:
                raise ValidationError(f"unknown field {key}", field=key)
        for key, value in fields.items():
            setattr(entity, key, value)
        self.commit(entity)
        return entity


@contextmanager
def unit_of_work(db: Session, what: str) -> Iterator[None]:
    """Commit everything staged in the block once, or roll all of it back."""
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        log.error("rolled back %s: %s", what, e)
        raise StorageError(f"failed to save {what}") from e
    except Exception:
        db.rollback()
        raise
