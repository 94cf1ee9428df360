"""Unit tests for the personalization signal store."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from search_service.schemas import InteractionType
from search_service.services.signal_store import SignalStore


class TestSearchTracking:
    def test_history_is_bounded_to_most_recent(self, signal_store: SignalStore) -> None:
        for i in range(60):
            signal_store.track_search(f"query {i}", "u1")

        history = signal_store.search_history("u1")
        assert len(history) == 50
        assert history == [f"query {i}" for i in range(10, 60)]

    def test_history_keeps_raw_query(self, signal_store: SignalStore) -> None:
        signal_store.track_search("  Red Dress ", "u1")
        assert signal_store.search_history("u1") == ["  Red Dress "]

    def test_anonymous_search_only_counts_popularity(self, signal_store: SignalStore) -> None:
        signal_store.track_search("boots", None)
        assert signal_store.tracked_user_count == 0
        assert signal_store.trending_searches(5)[0].query == "boots"

    def test_popularity_uses_normalized_query(self, signal_store: SignalStore) -> None:
        signal_store.track_search("Red  Dress", "u1")
        signal_store.track_search("red dress", "u2")

        trending = signal_store.trending_searches(5)
        assert len(trending) == 1
        assert trending[0].query == "red dress"
        assert trending[0].count == 2

    def test_blank_query_is_ignored(self, signal_store: SignalStore) -> None:
        signal_store.track_search("   ", "u1")
        assert signal_store.trending_searches() == []
        assert signal_store.search_history("u1") == []

    def test_recent_searches(self, signal_store: SignalStore) -> None:
        for q in ["a1", "a2", "a3", "a4", "a5", "a6"]:
            signal_store.track_search(q, "u1")
        assert signal_store.recent_searches("u1", 5) == ["a2", "a3", "a4", "a5", "a6"]
        assert signal_store.recent_searches("nobody", 5) == []

    def test_least_recent_user_evicted(self) -> None:
        store = SignalStore(max_tracked_users=2)
        store.track_search("q", "u1")
        store.track_search("q", "u2")
        store.track_search("q", "u1")
        store.track_search("q", "u3")

        assert store.search_history("u2") == []
        assert store.search_history("u1") == ["q", "q"]
        assert store.tracked_user_count == 2


class TestTrending:
    def test_sorted_by_count_descending(self, signal_store: SignalStore) -> None:
        for q, n in [("hat", 1), ("coat", 3), ("scarf", 2)]:
            for _ in range(n):
                signal_store.track_search(q)

        trending = signal_store.trending_searches(10)
        assert [(t.query, t.count) for t in trending] == [("coat", 3), ("scarf", 2), ("hat", 1)]

    def test_ties_keep_first_tracked_order(self, signal_store: SignalStore) -> None:
        for q in ["alpha", "beta", "gamma"]:
            signal_store.track_search(q)
        assert [t.query for t in signal_store.trending_searches(10)] == ["alpha", "beta", "gamma"]

    def test_limit(self, signal_store: SignalStore) -> None:
        for i in range(5):
            signal_store.track_search(f"q{i}")
        assert len(signal_store.trending_searches(3)) == 3
        assert signal_store.trending_searches(0) == []


class TestInteractions:
    def test_counts_each_type(self, signal_store: SignalStore) -> None:
        signal_store.track_interaction("u1", "p1", InteractionType.VIEW)
        signal_store.track_interaction("u1", "p1", "view")
        signal_store.track_interaction("u1", "p1", "click")
        signal_store.track_interaction("u1", "p1", InteractionType.CART)

        record = signal_store.get_interaction("u1", "p1")
        assert record is not None
        assert (record.views, record.clicks, record.add_to_cart) == (2, 1, 1)

    def test_anonymous_is_noop(self, signal_store: SignalStore) -> None:
        signal_store.track_interaction(None, "p1", "view")
        signal_store.track_interaction("", "p1", "view")
        assert signal_store.interaction_count == 0

    def test_unknown_type_rejected(self, signal_store: SignalStore) -> None:
        with pytest.raises(ValueError):
            signal_store.track_interaction("u1", "p1", "wishlist")

    def test_get_interaction_returns_snapshot(self, signal_store: SignalStore) -> None:
        signal_store.track_interaction("u1", "p1", "view")
        snapshot = signal_store.get_interaction("u1", "p1")
        snapshot.views = 100
        assert signal_store.get_interaction("u1", "p1").views == 1

    def test_least_recently_touched_record_evicted(self) -> None:
        store = SignalStore(max_interaction_records=2)
        store.track_interaction("u1", "p1", "view")
        store.track_interaction("u1", "p2", "view")
        store.track_interaction("u1", "p1", "click")
        store.track_interaction("u1", "p3", "view")

        assert store.get_interaction("u1", "p2") is None
        assert store.get_interaction("u1", "p1") is not None
        assert store.interaction_count == 2

    def test_clear(self, signal_store: SignalStore) -> None:
        signal_store.track_search("q", "u1")
        signal_store.track_interaction("u1", "p1", "view")
        signal_store.clear()
        assert signal_store.trending_searches() == []
        assert signal_store.interaction_count == 0


class TestConcurrency:
    def test_concurrent_updates_are_not_lost(self, signal_store: SignalStore) -> None:
        def work(i: int) -> None:
            signal_store.track_search("shared query", f"user-{i % 4}")
            signal_store.track_interaction("u1", "p1", "view")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(work, range(400)))

        assert signal_store.trending_searches(1)[0].count == 400
        assert signal_store.get_interaction("u1", "p1").views == 400
        assert all(len(signal_store.search_history(f"user-{i}")) == 50 for i in range(4))
