"""
Leaderboard ranking over ledger snapshots.

Ordering is ``total_points`` descending, ties broken by ``citizen_id``
ascending, so every store produces the same ranking for the same data.
Ranks are 1-based positions in that ordering.
"""

from __future__ import annotations

from .ledger import LedgerEntry

NOT_RANKED = -1


def _ranking_key(entry: LedgerEntry) -> tuple[int, str]:
    return (-entry.total_points, entry.citizen_id)


class LeaderboardRanker:

    def __init__(self, store) -> None:
        self.store = store

    def full(self) -> list[LedgerEntry]:
        return sorted(self.store.all(), key=_ranking_key)

    def top(self, limit: int) -> list[LedgerEntry]:
        """At most ``limit`` entries with the most points."""
        if limit <= 0:
            return []
        return self.full()[:limit]

    def rank_of(self, citizen_id: str) -> int:
        """1-based rank of ``citizen_id``, or ``NOT_RANKED`` if absent."""
        for position, entry in enumerate(self.full(), start=1):
            if entry.citizen_id == citizen_id:
                return position
        return NOT_RANKED

    def total_citizens(self) -> int:
        return len(self.store.all())
