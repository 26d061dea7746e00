"""
Tests for the ledger stores and the leaderboard ranking.

The in-memory store is exercised with real threads; the database store
runs inside ``django.test.TestCase``.
"""

from __future__ import annotations

import threading

import pytest
from django.test import TestCase

from rewards.leaderboard import NOT_RANKED, LeaderboardRanker
from rewards.ledger import LedgerEntry, RewardLedger
from rewards.models import CitizenReward
from rewards.stores import DatabaseLedgerStore, InMemoryLedgerStore


# ════════════════════════════════════════════════════════════════════
#  In-memory store
# ════════════════════════════════════════════════════════════════════

class TestInMemoryLedgerStore:

    def test_snapshots_are_copied(self):
        store = InMemoryLedgerStore()
        store.upsert(LedgerEntry(citizen_id="c-1", total_points=10))
        snapshot = store.get("c-1")
        snapshot.total_points = 999
        assert store.get("c-1").total_points == 10

    def test_upsert_stamps_timestamps(self):
        store = InMemoryLedgerStore()
        first = store.upsert(LedgerEntry(citizen_id="c-1"))
        second = store.upsert(LedgerEntry(citizen_id="c-1", total_points=5))
        assert first.created_at is not None
        assert second.created_at == first.created_at
        assert second.updated_at >= first.updated_at

    def test_concurrent_updates_lose_nothing(self):
        ledger = RewardLedger(InMemoryLedgerStore())
        workers, per_worker = 8, 25

        def submit():
            for _ in range(per_worker):
                ledger.record_observation("c-1", False)

        threads = [threading.Thread(target=submit) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        entry = ledger.find("c-1")
        assert entry.valid_observations == workers * per_worker
        assert entry.total_points == 10 * workers * per_worker
        assert entry.badges == ["Bronze", "Silver", "Gold"]

    def test_different_citizens_use_different_locks(self):
        store = InMemoryLedgerStore()
        with store.locked("a"):
            with store.locked("b"):
                lock_a, _ = store._locks["a"]
                lock_b, _ = store._locks["b"]
                assert lock_a is not lock_b
            with store.locked("a"):
                assert store._locks["a"] == (lock_a, 2)

    def test_locks_are_released_after_use(self):
        store = InMemoryLedgerStore()
        ledger = RewardLedger(store)
        for citizen_id in ("a", "b", "c"):
            ledger.record_observation(citizen_id, True)
        ledger.delete("a")
        ledger.clear()
        assert store._locks == {}

    def test_lock_is_released_when_the_body_raises(self):
        store = InMemoryLedgerStore()
        with pytest.raises(RuntimeError):
            with store.locked("a"):
                raise RuntimeError("boom")
        assert store._locks == {}


# ════════════════════════════════════════════════════════════════════
#  Leaderboard
# ════════════════════════════════════════════════════════════════════

@pytest.fixture()
def ranked_store() -> InMemoryLedgerStore:
    store = InMemoryLedgerStore()
    for citizen_id, points in [("c-50", 50), ("c-500", 500), ("c-100", 100), ("c-200", 200)]:
        store.upsert(LedgerEntry(citizen_id=citizen_id, total_points=points))
    return store


class TestLeaderboardRanker:

    def test_top_three(self, ranked_store):
        top = LeaderboardRanker(ranked_store).top(3)
        assert [entry.total_points for entry in top] == [500, 200, 100]

    def test_top_with_large_limit_returns_everyone(self, ranked_store):
        assert len(LeaderboardRanker(ranked_store).top(50)) == 4

    def test_top_with_non_positive_limit_is_empty(self, ranked_store):
        assert LeaderboardRanker(ranked_store).top(0) == []

    def test_rank_of_leader_is_one(self, ranked_store):
        assert LeaderboardRanker(ranked_store).rank_of("c-500") == 1
        assert LeaderboardRanker(ranked_store).rank_of("c-50") == 4

    def test_unknown_citizen_is_not_ranked(self, ranked_store):
        assert LeaderboardRanker(ranked_store).rank_of("nobody") == NOT_RANKED

    def test_ties_break_by_citizen_id(self):
        store = InMemoryLedgerStore()
        for citizen_id in ("zed", "amy", "kim"):
            store.upsert(LedgerEntry(citizen_id=citizen_id, total_points=40))
        ranker = LeaderboardRanker(store)
        assert [entry.citizen_id for entry in ranker.full()] == ["amy", "kim", "zed"]
        assert ranker.rank_of("kim") == 2


# ════════════════════════════════════════════════════════════════════
#  Database store
# ════════════════════════════════════════════════════════════════════

class TestDatabaseLedgerStore(TestCase):

    def setUp(self):
        self.store = DatabaseLedgerStore()
        self.ledger = RewardLedger(self.store)

    def test_get_missing_returns_none(self):
        self.assertIsNone(self.store.get("nobody"))

    def test_record_observation_persists_row(self):
        self.ledger.record_observation("c-1", True)
        row = CitizenReward.objects.get(citizen_id="c-1")
        self.assertEqual(row.total_points, 20)
        self.assertEqual(row.valid_observations, 1)
        self.assertEqual(row.complete_observations, 1)

    def test_badges_round_trip_through_json(self):
        self.ledger.record_observations("c-1", valid_count=10, complete_count=10)
        entry = self.store.get("c-1")
        self.assertEqual(entry.badges, ["Bronze", "Silver"])
        self.assertEqual(entry.current_badge, "Silver")

    def test_get_or_create_creates_single_row(self):
        self.ledger.get_or_create("c-1")
        self.ledger.get_or_create("c-1")
        self.assertEqual(CitizenReward.objects.filter(citizen_id="c-1").count(), 1)

    def test_delete_and_clear(self):
        self.ledger.get_or_create("c-1")
        self.ledger.get_or_create("c-2")
        self.assertTrue(self.store.delete("c-1"))
        self.assertFalse(self.store.delete("c-1"))
        self.assertEqual(self.store.clear(), 1)
        self.assertEqual(CitizenReward.objects.count(), 0)

    def test_leaderboard_over_database_rows(self):
        for citizen_id, points in [("b", 30), ("a", 30), ("c", 90)]:
            self.ledger.add_points(citizen_id, points)
        ranker = LeaderboardRanker(self.store)
        self.assertEqual([e.citizen_id for e in ranker.full()], ["c", "a", "b"])
