"""
Rewards Service Layer.

This module is the **single source of truth** for reward business logic
reachable from views and from other apps.  It wires the configured
``LedgerStore`` into ``RewardLedger`` (arithmetic) and
``LeaderboardRanker`` (ordering), and adds the administrative guards
and cross-app recalculation.

Architecture
------------
- ``get_ledger_store``         — resolve ``settings.REWARDS["LEDGER_STORE"]``.
- ``RewardService``            — reads, observation credits, admin
                                 adjustments, leaderboard, filters,
                                 recalculation from stored observations.
- ``RewardStatisticsService``  — community-wide aggregates.

Access policy
-------------
Reads are public.  Every mutation reachable over HTTP takes a
``requested_by`` user and requires an administrator.
``credit_observation`` has no guard: it is the internal path used by
``observations.services`` when a submission is stored.
"""

from __future__ import annotations

import functools
import itertools
import logging
from typing import Any

from django.apps import apps
from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

from core.constants import (
    DEFAULT_LEADERBOARD_LIMIT,
    MAX_BATCH_OBSERVATIONS,
    TOP_CONTRIBUTORS_LIMIT,
)
from core.domain.access import require_administrator
from core.domain.exceptions import DomainError, NotFound

from .leaderboard import NOT_RANKED, LeaderboardRanker
from .ledger import LedgerEntry, RewardLedger
from .models import BadgeLevel
from .stores import LedgerStore

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def _build_store(dotted_path: str) -> LedgerStore:
    store_class = import_string(dotted_path)
    logger.info("Using reward ledger store %s", dotted_path)
    return store_class()


def get_ledger_store() -> LedgerStore:
    """
    Return the process-wide store named by ``REWARDS["LEDGER_STORE"]``.

    One instance is built per dotted path, so an in-memory store keeps
    its contents for the life of the process.
    """
    return _build_store(settings.REWARDS["LEDGER_STORE"])


def normalize_badge(level: str) -> str:
    """Map ``"gold"`` / ``"GOLD"`` / ``"Gold"`` to ``"Gold"``; reject unknown levels."""
    for choice in BadgeLevel.values:
        if choice.lower() == (level or "").strip().lower():
            return choice
    raise DomainError(
        f"Unknown badge level '{level}'. Expected one of: {', '.join(BadgeLevel.values)}."
    )


# ═══════════════════════════════════════════════════════════════════
#  Reward Service
# ═══════════════════════════════════════════════════════════════════


class RewardService:

    def __init__(self, store: LedgerStore | None = None) -> None:
        self.store = store if store is not None else get_ledger_store()
        self.ledger = RewardLedger(self.store)
        self.ranker = LeaderboardRanker(self.store)

    # ── Reads ───────────────────────────────────────────────────────

    def get(self, citizen_id: str) -> LedgerEntry:
        """Return the citizen's entry, creating a zeroed one if absent."""
        return self.ledger.get_or_create(citizen_id)

    def create(self, citizen_id: str) -> LedgerEntry:
        return self.ledger.create(citizen_id)

    def all(self) -> list[LedgerEntry]:
        return self.ranker.full()

    # ── Observation credits ─────────────────────────────────────────

    def credit_observation(self, citizen_id: str, *, is_complete: bool) -> LedgerEntry:
        return self.ledger.record_observation(citizen_id, is_complete)

    def record_observation(self, citizen_id: str, *, is_complete: bool, requested_by) -> LedgerEntry:
        require_administrator(requested_by)
        return self.credit_observation(citizen_id, is_complete=is_complete)

    def record_observations(
        self,
        citizen_id: str,
        *,
        valid_count: int,
        complete_count: int,
        requested_by,
    ) -> LedgerEntry:
        require_administrator(requested_by)
        if valid_count < 0 or complete_count < 0:
            raise DomainError("Observation counts must not be negative.")
        if complete_count > valid_count:
            raise DomainError("complete_count cannot exceed valid_count.")
        if valid_count > MAX_BATCH_OBSERVATIONS:
            raise DomainError(f"A batch may credit at most {MAX_BATCH_OBSERVATIONS} observations.")
        return self.ledger.record_observations(citizen_id, valid_count, complete_count)

    # ── Administrative adjustments ──────────────────────────────────

    def add_points(self, citizen_id: str, *, points: int, requested_by) -> LedgerEntry:
        require_administrator(requested_by)
        return self.ledger.add_points(citizen_id, points)

    def apply_reward(
        self,
        citizen_id: str,
        *,
        points: int,
        valid_observations: int = 0,
        complete_observations: int = 0,
        requested_by,
    ) -> LedgerEntry:
        require_administrator(requested_by)
        return self.ledger.apply_adjustment(
            citizen_id,
            points=points,
            valid_observations=valid_observations,
            complete_observations=complete_observations,
        )

    def reset(self, citizen_id: str, *, requested_by) -> LedgerEntry:
        require_administrator(requested_by)
        return self.ledger.reset(citizen_id)

    def delete(self, citizen_id: str, *, requested_by) -> None:
        require_administrator(requested_by)
        if not self.ledger.delete(citizen_id):
            raise NotFound("Citizen not found.")

    def clear(self, *, requested_by) -> int:
        require_administrator(requested_by)
        return self.ledger.clear()

    # ── Recalculation from stored observations ──────────────────────

    def recalculate(self, citizen_id: str, *, requested_by) -> LedgerEntry:
        """
        Rebuild one citizen's entry by replaying their valid
        observations in submission order.
        """
        require_administrator(requested_by)
        Observation = apps.get_model("observations", "Observation")
        completes = list(
            Observation.objects
            .filter(citizen_id=citizen_id, is_valid=True)
            .order_by("submitted_at")
            .values_list("is_complete", flat=True)
        )
        return self.ledger.replay(citizen_id, completes)

    def refresh_all(self, *, requested_by) -> int:
        """
        Rebuild the entry of every citizen with at least one valid
        observation.  Returns the number of citizens refreshed.
        """
        require_administrator(requested_by)
        Observation = apps.get_model("observations", "Observation")
        rows = (
            Observation.objects
            .filter(is_valid=True)
            .order_by("citizen_id", "submitted_at")
            .values_list("citizen_id", "is_complete")
        )
        refreshed = 0
        with transaction.atomic():
            for citizen_id, group in itertools.groupby(rows, key=lambda row: row[0]):
                self.ledger.replay(citizen_id, (is_complete for _, is_complete in group))
                refreshed += 1
        logger.info("Refreshed rewards for %d citizens", refreshed)
        return refreshed

    # ── Leaderboard ─────────────────────────────────────────────────

    def leaderboard(self, limit: int = DEFAULT_LEADERBOARD_LIMIT) -> list[LedgerEntry]:
        if limit <= 0:
            raise DomainError("limit must be a positive integer.")
        return self.ranker.top(limit)

    def full_leaderboard(self) -> list[LedgerEntry]:
        return self.ranker.full()

    def top_contributors(self) -> list[LedgerEntry]:
        return self.ranker.top(TOP_CONTRIBUTORS_LIMIT)

    def rank(self, citizen_id: str) -> dict[str, Any]:
        rank = self.ranker.rank_of(citizen_id)
        if rank == NOT_RANKED:
            raise NotFound("Citizen not found.")
        return {
            "citizen_id": citizen_id,
            "rank": rank,
            "total_citizens": self.ranker.total_citizens(),
        }

    # ── Filters ─────────────────────────────────────────────────────

    def by_badge(self, level: str) -> list[LedgerEntry]:
        badge = normalize_badge(level)
        return [entry for entry in self.ranker.full() if entry.current_badge == badge]

    def with_min_points(self, min_points: int) -> list[LedgerEntry]:
        if min_points < 0:
            raise DomainError("min_points must not be negative.")
        return [entry for entry in self.ranker.full() if entry.total_points >= min_points]

    def with_min_observations(self, min_observations: int) -> list[LedgerEntry]:
        if min_observations < 0:
            raise DomainError("min_observations must not be negative.")
        return [
            entry for entry in self.ranker.full()
            if entry.valid_observations >= min_observations
        ]


# ═══════════════════════════════════════════════════════════════════
#  Statistics Service
# ═══════════════════════════════════════════════════════════════════


class RewardStatisticsService:

    def __init__(self, store: LedgerStore | None = None) -> None:
        self.store = store if store is not None else get_ledger_store()

    def badge_distribution(self, entries: list[LedgerEntry] | None = None) -> dict[str, int]:
        entries = self.store.all() if entries is None else entries
        distribution = {badge.lower(): 0 for badge in BadgeLevel.values}
        for entry in entries:
            key = entry.current_badge.lower()
            distribution[key] = distribution.get(key, 0) + 1
        return distribution

    def summary(self) -> dict[str, Any]:
        entries = self.store.all()
        total_citizens = len(entries)
        total_points = sum(entry.total_points for entry in entries)
        return {
            "total_citizens": total_citizens,
            "total_points": total_points,
            "total_observations": sum(entry.valid_observations for entry in entries),
            "total_complete_observations": sum(entry.complete_observations for entry in entries),
            "average_points": round(total_points / total_citizens, 2) if total_citizens else 0.0,
            "badge_distribution": self.badge_distribution(entries),
        }
