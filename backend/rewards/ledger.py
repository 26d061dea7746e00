"""
Reward ledger — per-citizen points and badge state machine.

This module holds the arithmetic of the rewards app and nothing else:
no ORM queries, no HTTP.  Persistence is delegated to a
``rewards.stores.LedgerStore``, so the same rules run against the
database in production and against an in-memory map in tests.

Points
------
* Every valid observation earns ``BASE_OBSERVATION_POINTS`` (10).
* A complete observation earns ``COMPLETE_OBSERVATION_BONUS`` (10) more.

Badges
------
::

    None ──(≥100)──▶ Bronze ──(≥200)──▶ Silver ──(≥500)──▶ Gold

Badges are only ever added, never removed (except by ``reset``).  The
thresholds are checked top-down and **at most one** badge is awarded
per evaluation: the one for the highest threshold reached, if it is not
already held.  A citizen who jumps from 0 straight past 500 in one
event earns Gold and never earns Bronze or Silver.

Badge evaluation runs only from ``LedgerEntry.evaluate_badges``, which
``record_observation`` calls.  Raw administrative adjustments
(``add_points``, ``apply_adjustment``) deliberately skip it, so
``current_badge`` can lag behind ``total_points`` after them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable

from core.constants import (
    BASE_OBSERVATION_POINTS,
    BRONZE_BADGE_THRESHOLD,
    COMPLETE_OBSERVATION_BONUS,
    GOLD_BADGE_THRESHOLD,
    MAX_LEDGER_VALUE,
    MAXIMUM_LEVEL_LABEL,
    SILVER_BADGE_THRESHOLD,
)
from core.domain.exceptions import DomainError

from .models import BadgeLevel

logger = logging.getLogger(__name__)

# Highest tier first; evaluation order matters.
BADGE_LADDER: tuple[tuple[str, int], ...] = (
    (BadgeLevel.GOLD.value, GOLD_BADGE_THRESHOLD),
    (BadgeLevel.SILVER.value, SILVER_BADGE_THRESHOLD),
    (BadgeLevel.BRONZE.value, BRONZE_BADGE_THRESHOLD),
)


@dataclass
class LedgerEntry:
    """Snapshot of one citizen's reward state."""

    citizen_id: str
    total_points: int = 0
    valid_observations: int = 0
    complete_observations: int = 0
    badges: list[str] = field(default_factory=list)
    current_badge: str = BadgeLevel.NONE.value
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # ── Mutations ───────────────────────────────────────────────────

    def record_observation(self, is_complete: bool) -> str | None:
        """
        Credit one valid observation and re-evaluate badges.

        Returns the newly awarded badge, if any.
        """
        self.valid_observations += 1
        self.total_points += BASE_OBSERVATION_POINTS
        if is_complete:
            self.complete_observations += 1
            self.total_points += COMPLETE_OBSERVATION_BONUS
        return self.evaluate_badges()

    def evaluate_badges(self) -> str | None:
        """
        Award the badge for the highest threshold reached, unless it is
        already held.  Returns the awarded badge or ``None``.
        """
        for badge, threshold in BADGE_LADDER:
            if self.total_points >= threshold:
                if badge in self.badges:
                    return None
                self.badges.append(badge)
                self.current_badge = badge
                return badge
        return None

    def reset(self) -> None:
        self.total_points = 0
        self.valid_observations = 0
        self.complete_observations = 0
        self.badges = []
        self.current_badge = BadgeLevel.NONE.value

    # ── Derived values ──────────────────────────────────────────────

    @property
    def next_badge(self) -> str:
        for badge, threshold in reversed(BADGE_LADDER):
            if self.total_points < threshold:
                return badge
        return MAXIMUM_LEVEL_LABEL

    @property
    def points_to_next_badge(self) -> int:
        for _, threshold in reversed(BADGE_LADDER):
            if self.total_points < threshold:
                return threshold - self.total_points
        return 0

    def copy(self) -> LedgerEntry:
        return LedgerEntry(
            citizen_id=self.citizen_id,
            total_points=self.total_points,
            valid_observations=self.valid_observations,
            complete_observations=self.complete_observations,
            badges=list(self.badges),
            current_badge=self.current_badge,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )


def _check_bounds(entry: LedgerEntry) -> None:
    for name in ("total_points", "valid_observations", "complete_observations"):
        if getattr(entry, name) > MAX_LEDGER_VALUE:
            raise DomainError(
                f"Update rejected: {name} for citizen {entry.citizen_id} "
                f"would exceed {MAX_LEDGER_VALUE}."
            )


class RewardLedger:
    """
    Operations on citizen ledger entries, applied through a store.

    Every mutation runs inside ``store.locked(citizen_id)`` so that
    concurrent updates to one citizen are serialised and none are lost.
    Reads never fail: a citizen without an entry gets a zeroed one.
    """

    def __init__(self, store) -> None:
        self.store = store

    def _mutate(self, citizen_id: str, change: Callable[[LedgerEntry], None]) -> LedgerEntry:
        with self.store.locked(citizen_id):
            entry = self.store.get(citizen_id) or LedgerEntry(citizen_id=citizen_id)
            change(entry)
            _check_bounds(entry)
            return self.store.upsert(entry)

    # ── Lookup / lifecycle ──────────────────────────────────────────

    def find(self, citizen_id: str) -> LedgerEntry | None:
        return self.store.get(citizen_id)

    def get_or_create(self, citizen_id: str) -> LedgerEntry:
        entry = self.store.get(citizen_id)
        if entry is not None:
            return entry
        with self.store.locked(citizen_id):
            entry = self.store.get(citizen_id)
            if entry is None:
                entry = self.store.upsert(LedgerEntry(citizen_id=citizen_id))
                logger.info("Created reward ledger entry for citizen %s", citizen_id)
            return entry

    def create(self, citizen_id: str) -> LedgerEntry:
        """Explicit "create profile"; returns the existing entry if present."""
        return self.get_or_create(citizen_id)

    def delete(self, citizen_id: str) -> bool:
        deleted = self.store.delete(citizen_id)
        if deleted:
            logger.info("Deleted reward ledger entry for citizen %s", citizen_id)
        return deleted

    def clear(self) -> int:
        removed = self.store.clear()
        logger.info("Cleared %d reward ledger entries", removed)
        return removed

    # ── Observation-driven updates ──────────────────────────────────

    def record_observation(self, citizen_id: str, is_complete: bool) -> LedgerEntry:
        awarded: list[str] = []

        def change(entry: LedgerEntry) -> None:
            badge = entry.record_observation(is_complete)
            if badge:
                awarded.append(badge)

        entry = self._mutate(citizen_id, change)
        logger.info(
            "Citizen %s credited for %s observation: %d points",
            citizen_id,
            "complete" if is_complete else "valid",
            entry.total_points,
        )
        for badge in awarded:
            logger.info("Citizen %s earned the %s badge", citizen_id, badge)
        return entry

    def record_observations(self, citizen_id: str, valid_count: int, complete_count: int) -> LedgerEntry:
        """
        Credit ``valid_count`` observations, the first ``complete_count``
        of which are complete.  Badges are evaluated after each one.
        """
        def change(entry: LedgerEntry) -> None:
            for index in range(valid_count):
                entry.record_observation(index < complete_count)

        entry = self._mutate(citizen_id, change)
        logger.info(
            "Citizen %s credited for %d observations (%d complete)",
            citizen_id,
            valid_count,
            complete_count,
        )
        return entry

    def replay(self, citizen_id: str, completes: Iterable[bool]) -> LedgerEntry:
        """Reset the entry, then credit one observation per flag in order."""
        flags = list(completes)

        def change(entry: LedgerEntry) -> None:
            entry.reset()
            for is_complete in flags:
                entry.record_observation(is_complete)

        entry = self._mutate(citizen_id, change)
        logger.info(
            "Recalculated rewards for citizen %s from %d observations: %d points, badge %s",
            citizen_id,
            len(flags),
            entry.total_points,
            entry.current_badge,
        )
        return entry

    # ── Administrative adjustments (no badge evaluation) ────────────

    def add_points(self, citizen_id: str, delta: int) -> LedgerEntry:
        def change(entry: LedgerEntry) -> None:
            entry.total_points += delta

        entry = self._mutate(citizen_id, change)
        logger.info("Adjusted citizen %s by %+d points", citizen_id, delta)
        return entry

    def apply_adjustment(
        self,
        citizen_id: str,
        *,
        points: int = 0,
        valid_observations: int = 0,
        complete_observations: int = 0,
    ) -> LedgerEntry:
        """
        Generic reward adjustment: non-zero ``points`` are added, and
        positive observation counts are added to the counters.
        """
        def change(entry: LedgerEntry) -> None:
            if points:
                entry.total_points += points
            if valid_observations > 0:
                entry.valid_observations += valid_observations
            if complete_observations > 0:
                entry.complete_observations += complete_observations

        entry = self._mutate(citizen_id, change)
        logger.info(
            "Applied reward to citizen %s: %+d points, +%d valid, +%d complete",
            citizen_id,
            points,
            max(valid_observations, 0),
            max(complete_observations, 0),
        )
        return entry

    def reset(self, citizen_id: str) -> LedgerEntry:
        entry = self._mutate(citizen_id, lambda entry: entry.reset())
        logger.info("Reset rewards for citizen %s", citizen_id)
        return entry
