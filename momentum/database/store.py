"""
momentum.database.store — Id-Keyed Entity Store
================================================

One :class:`EntityStore` wraps one ORM model inside one session and gives
the services a plain mapping-style contract:

* ``insert(key, record)`` — upsert; overwrites whatever row sits at *key*.
* ``get(key)``            — the row, or ``None`` when absent.
* ``remove(key)``         — delete if present; absent is not an error.
* ``values()``            — every row in key order, streamed lazily.  Each
  call starts a fresh query, so the sequence can be enumerated again.

Stores hold no state of their own: the owning
:class:`~momentum.services.tracker.FitnessTracker` creates them per unit of
work and commits or rolls back the shared session.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from momentum.database.models import Base

T = TypeVar("T", bound=Base)

_STREAM_BATCH = 100


class EntityStore(Generic[T]):
    """Mapping from entity id to ORM row for a single model."""

    def __init__(self, session: Session, model: type[T]) -> None:
        self._session = session
        self._model = model

    @property
    def model(self) -> type[T]:
        return self._model

    def insert(self, key: str, record: T) -> T:
        """Store *record* under *key*, replacing any existing row.

        Returns the persistent instance, which is *record* itself unless a
        different object already occupied *key*.
        """
        record.id = key
        existing = self._session.get(self._model, key)
        if existing is not None and existing is not record:
            record = self._session.merge(record)
        else:
            self._session.add(record)
        self._session.flush()
        return record

    def get(self, key: str) -> T | None:
        return self._session.get(self._model, key)

    def remove(self, key: str) -> bool:
        """Delete the row at *key*.  Returns ``True`` if a row was removed."""
        obj = self._session.get(self._model, key)
        if obj is None:
            return False
        self._session.delete(obj)
        self._session.flush()
        return True

    def values(self) -> Iterator[T]:
        """Yield every row in key order."""
        return self.find()

    def find(self, *criteria: Any) -> Iterator[T]:
        """Yield rows matching SQL *criteria*, in key order."""
        stmt = select(self._model).where(*criteria).order_by(self._model.id)
        yield from self._session.scalars(stmt.execution_options(yield_per=_STREAM_BATCH))

    def first(self, *criteria: Any) -> T | None:
        """Return the first row (in key order) matching *criteria*, if any."""
        stmt = select(self._model).where(*criteria).order_by(self._model.id).limit(1)
        return self._session.scalar(stmt)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return self._session.scalar(select(func.count()).select_from(self._model)) or 0
