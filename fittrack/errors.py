# fittrack/errors.py
"""Typed failures raised by repositories and services.

Routers never catch these one by one; ``fittrack.main`` installs a handler
that renders any ``FitTrackError`` as ``{"detail": ..., "error": ...}`` plus
the error's context fields.
"""
from __future__ import annotations
from typing import Any


class FitTrackError(Exception):
    code = "error"
    status_code = 400

    def __init__(self, message: str, **context: Any):
        super().__init__(message)
        self.message = message
        self.context = {k: v for k, v in context.items() if v is not None}

    def to_dict(self) -> dict[str, Any]:
        return {"detail": self.message, "error": self.code, **self.context}


class ValidationError(FitTrackError):
    code = "validation_error"
    status_code = 422

    def __init__(self, message: str, *, field: str | None = None):
        super().__init__(message, field=field)
        self.field = field


class NotFound(FitTrackError):
    code = "not_found"
    status_code = 404

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(f"{entity} {entity_id} not found", entity=entity, id=entity_id)
        self.entity = entity
        self.entity_id = entity_id


class ConflictError(FitTrackError):
    code = "conflict"
    status_code = 409

    def __init__(self, message: str, *, field: str | None = None, state: str | None = None):
        super().__init__(message, field=field, state=state)
        self.field = field
        self.state = state


class Unauthorized(FitTrackError):
    code = "unauthorized"
    status_code = 401


class StorageError(FitTrackError):
    code = "storage_error"
    status_code = 503
