# fittrack/repositories/ordering.py
"""Sequencing helpers for rows that carry a per-parent ``order`` column.

Plan entries and exercise logs both keep ``order`` unique within their parent
and contiguous from 0.
"""
from __future__ import annotations
from typing import Optional, Protocol, Sequence

from sqlalchemy.orm import Session

from fittrack.errors import ValidationError


class Ordered(Protocol):
    order: int


def insertion_index(count: int, order: Optional[int]) -> int:
    """Where a new row lands in a list of ``count`` rows.

    ``None`` appends; an index past the end is clamped to the end; an index
    that collides shifts the tail right.
    """
    if order is None:
        return count
    if order < 0:
        raise ValidationError("order must be >= 0", field="order")
    return min(order, count)


def resequence(db: Session, rows: Sequence[Ordered]) -> None:
    """Renumber ``rows`` to 0..n-1 in the given sequence and flush.

    The first pass parks every row on a distinct negative value so the
    (parent, order) unique constraint never sees a duplicate mid-update.
    """
    for i, row in enumerate(rows):
        row.order = -(i + 1)
    db.flush()
    for i, row in enumerate(rows):
        row.order = i
    db.flush()
