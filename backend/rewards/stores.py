"""
Ledger stores — where ``rewards.ledger.LedgerEntry`` snapshots live.

``RewardLedger`` only ever talks to the ``LedgerStore`` interface:

==================  =========================================================
``get``             Current snapshot for a citizen, or ``None``.
``upsert``          Insert or replace a snapshot; returns the stored copy.
``delete``          Remove a citizen's snapshot; ``True`` if one existed.
``all``             Every snapshot (unordered).
``clear``           Remove everything; returns the number removed.
``locked``          Context manager serialising read-modify-write on one
                    citizen.  Different citizens never share a lock.
==================  =========================================================

Implementations
---------------
``DatabaseLedgerStore``
    Backed by the ``CitizenReward`` table.  ``locked`` opens a
    transaction and takes a ``SELECT ... FOR UPDATE`` row lock.
``InMemoryLedgerStore``
    A process-wide dict guarded by per-citizen ``threading.RLock``\\ s.
    A citizen's lock only lives while some thread holds or waits on it,
    so the lock map never outgrows the number of concurrent callers.
    Snapshots are copied in and out so callers never share state with
    the store.

The active store is chosen by ``settings.REWARDS["LEDGER_STORE"]``
(see ``rewards.services.get_ledger_store``).
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator

from django.db import transaction
from django.utils import timezone

from core.domain.transactions import lock_or_create

from .ledger import LedgerEntry
from .models import CitizenReward


class LedgerStore(ABC):
    """Storage interface for ledger snapshots keyed by citizen id."""

    @abstractmethod
    def get(self, citizen_id: str) -> LedgerEntry | None: ...

    @abstractmethod
    def upsert(self, entry: LedgerEntry) -> LedgerEntry: ...

    @abstractmethod
    def delete(self, citizen_id: str) -> bool: ...

    @abstractmethod
    def all(self) -> list[LedgerEntry]: ...

    @abstractmethod
    def clear(self) -> int: ...

    @abstractmethod
    def locked(self, citizen_id: str):
        """Context manager holding the citizen's lock for its duration."""


# ═══════════════════════════════════════════════════════════════════
#  In-memory store
# ═══════════════════════════════════════════════════════════════════


class InMemoryLedgerStore(LedgerStore):

    def __init__(self) -> None:
        self._entries: dict[str, LedgerEntry] = {}
        # citizen_id -> (lock, number of threads holding or waiting on it)
        self._locks: dict[str, tuple[threading.RLock, int]] = {}
        self._guard = threading.Lock()

    @contextmanager
    def locked(self, citizen_id: str) -> Iterator[None]:
        with self._guard:
            lock, users = self._locks.get(citizen_id, (None, 0))
            if lock is None:
                lock = threading.RLock()
            self._locks[citizen_id] = (lock, users + 1)
        try:
            with lock:
                yield
        finally:
            with self._guard:
                _, users = self._locks[citizen_id]
                if users == 1:
                    # Nobody else holds or waits on it.
                    del self._locks[citizen_id]
                else:
                    self._locks[citizen_id] = (lock, users - 1)

    def get(self, citizen_id: str) -> LedgerEntry | None:
        with self._guard:
            entry = self._entries.get(citizen_id)
            return entry.copy() if entry is not None else None

    def upsert(self, entry: LedgerEntry) -> LedgerEntry:
        stored = entry.copy()
        now = timezone.now()
        with self._guard:
            previous = self._entries.get(entry.citizen_id)
            stored.created_at = previous.created_at if previous else (stored.created_at or now)
            stored.updated_at = now
            self._entries[entry.citizen_id] = stored
        return stored.copy()

    def delete(self, citizen_id: str) -> bool:
        with self._guard:
            return self._entries.pop(citizen_id, None) is not None

    def all(self) -> list[LedgerEntry]:
        with self._guard:
            return [entry.copy() for entry in self._entries.values()]

    def clear(self) -> int:
        with self._guard:
            removed = len(self._entries)
            self._entries.clear()
            return removed


# ═══════════════════════════════════════════════════════════════════
#  Database store
# ═══════════════════════════════════════════════════════════════════


def _to_entry(row: CitizenReward) -> LedgerEntry:
    return LedgerEntry(
        citizen_id=row.citizen_id,
        total_points=row.total_points,
        valid_observations=row.valid_observations,
        complete_observations=row.complete_observations,
        badges=list(row.badges or []),
        current_badge=row.current_badge,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class DatabaseLedgerStore(LedgerStore):
    """
    ``CitizenReward``-backed store.

    ``locked`` creates the citizen's row when it is missing so there is
    always a row to lock; every caller of ``locked`` writes the row
    anyway.
    """

    @contextmanager
    def locked(self, citizen_id: str) -> Iterator[None]:
        with transaction.atomic():
            lock_or_create(CitizenReward, citizen_id=citizen_id)
            yield

    def get(self, citizen_id: str) -> LedgerEntry | None:
        row = CitizenReward.objects.filter(citizen_id=citizen_id).first()
        return _to_entry(row) if row is not None else None

    def upsert(self, entry: LedgerEntry) -> LedgerEntry:
        row, _ = CitizenReward.objects.update_or_create(
            citizen_id=entry.citizen_id,
            defaults={
                "total_points": entry.total_points,
                "valid_observations": entry.valid_observations,
                "complete_observations": entry.complete_observations,
                "badges": list(entry.badges),
                "current_badge": entry.current_badge,
            },
        )
        return _to_entry(row)

    def delete(self, citizen_id: str) -> bool:
        deleted, _ = CitizenReward.objects.filter(citizen_id=citizen_id).delete()
        return deleted > 0

    def all(self) -> list[LedgerEntry]:
        return [_to_entry(row) for row in CitizenReward.objects.all()]

    def clear(self) -> int:
        deleted, _ = CitizenReward.objects.all().delete()
        return deleted
