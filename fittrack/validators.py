from __future__ import annotations
from typing import Iterable, Optional

from fittrack.errors import ValidationError

REST_DAY = "Rest"


def clean_muscle_groups(labels: Iterable[str] | None, *, field: str = "muscle_groups") -> list[str]:
    """Trim, drop blanks and duplicates (case-insensitive), keep first-seen order."""
    seen: set[str] = set()
    out: list[str] = []
    for raw in labels or []:
        label = (raw or "").strip()
        if not label or label.lower() in seen:
            continue
        seen.add(label.lower())
        out.append(label)
    if not out:
        raise ValidationError("at least one muscle group is required", field=field)
    return out


def is_rest_day(labels: Iterable[str]) -> bool:
    return [l.lower() for l in labels] == [REST_DAY.lower()]


def require_text(value: Optional[str], field: str) -> str:
    v = (value or "").strip()
    if not v:
        raise ValidationError(f"{field} cannot be blank", field=field)
    return v


def require_positive(value: Optional[int], field: str) -> int:
    if value is None or value <= 0:
        raise ValidationError(f"{field} must be > 0", field=field)
    return value


def optional_non_negative(value: Optional[float], field: str) -> Optional[float]:
    if value is not None and value < 0:
        raise ValidationError(f"{field} must be >= 0", field=field)
    return value


def require_day_of_week(value: Optional[int]) -> int:
    if value is None or not 0 <= value <= 6:
        raise ValidationError("day_of_week must be 0 (Sunday) to 6 (Saturday)", field="day_of_week")
    return value
