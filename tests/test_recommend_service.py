"""
Recommendation engine tests.
Run with: pytest tests/test_recommend_service.py -v
"""
from collections import Counter
from unittest.mock import MagicMock

import pytest

from core.exceptions import ExternalServiceError, StorageError
from services.record_store import RecordStore
from services.recommend_service import (
    build_category_frequency,
    collect_candidates,
    rank_categories,
    recommend,
    recommend_nearby
)


CATALOG = {
    "A": "Sushi,Bars",
    "B": "Sushi",
    "C": "Bars",
    "D": "Sushi, Ramen",
    "E": "Pizza",
}


class FlakyStore(RecordStore):
    """Record store whose restaurant lookups fail for selected IDs."""

    def __init__(self, db, failing):
        super().__init__(db)
        self.failing = set(failing)

    def get_restaurant(self, business_id):
        if business_id in self.failing:
            raise StorageError("lookup failed")
        return super().get_restaurant(business_id)


# ==============================
# Helpers
# ==============================
class TestCategoryRanking:
    """build_category_frequency / rank_categories / collect_candidates."""

    def test_frequency_counts_each_visit(self, store, seed):
        seed(CATALOG)

        frequency = build_category_frequency(store, {"A", "B"})

        assert frequency == Counter({"Sushi": 2, "Bars": 1})

    def test_rank_by_count_then_name(self):
        frequency = Counter({"Pizza": 1, "Sushi": 3, "Bars": 1, "Ramen": 2})

        assert rank_categories(frequency) == ["Sushi", "Ramen", "Bars", "Pizza"]

    def test_rank_empty(self):
        assert rank_categories(Counter()) == []

    def test_candidates_follow_category_order(self, store, seed):
        seed(CATALOG)

        candidates = collect_candidates(store, ["Sushi", "Bars"], {"A", "B"}, limit=10)

        assert candidates == ["D", "C"]

    def test_candidates_respect_allowed_set(self, store, seed):
        seed(CATALOG)

        candidates = collect_candidates(store, ["Sushi", "Bars"], {"A", "B"}, limit=10, allowed={"C"})

        assert candidates == ["C"]

    def test_candidates_exact_match(self, store, seed):
        seed({"A": "Bar", "B": "Barbecue", "C": "Bar, Pub"})

        assert collect_candidates(store, ["Bar"], {"A"}, limit=10) == ["B", "C"]
        assert collect_candidates(store, ["Bar"], {"A"}, limit=10, exact=True) == ["C"]


# ==============================
# recommend
# ==============================
class TestRecommend:

    def test_no_history_returns_empty(self, store, seed):
        seed(CATALOG)

        assert recommend(store, "alice") == []

    def test_example_ordering(self, store, seed):
        seed(CATALOG)
        store.record_visits("alice", ["A", "B"])

        results = recommend(store, "alice")

        assert [r.business_id for r in results] == ["D", "C"]
        assert all(r.is_visited is False for r in results)
        assert results[0].name == "Restaurant D"

    def test_never_returns_visited(self, store, seed):
        seed({f"r{i:02d}": "Pizza" for i in range(20)})
        visited = {"r00", "r03", "r07"}
        store.record_visits("alice", visited)

        results = recommend(store, "alice")

        assert not visited & {r.business_id for r in results}

    def test_truncated_to_max(self, store, seed):
        seed({f"r{i:02d}": "Pizza" for i in range(15)})
        store.record_visit("alice", "r00")

        results = recommend(store, "alice")

        assert [r.business_id for r in results] == [f"r{i:02d}" for i in range(1, 11)]

    def test_custom_limit(self, store, seed):
        seed({f"r{i:02d}": "Pizza" for i in range(15)})
        store.record_visit("alice", "r00")

        assert len(recommend(store, "alice", limit=3)) == 3

    def test_zero_limit(self, store, seed):
        seed({f"r{i:02d}": "Pizza" for i in range(15)})
        store.record_visit("alice", "r00")

        assert recommend(store, "alice", limit=0) == []

    def test_visited_restaurant_without_record(self, store, seed):
        seed(CATALOG)
        store.record_visit("alice", "ghost")

        assert recommend(store, "alice") == []

    def test_skips_failed_lookups(self, db, seed):
        seed(CATALOG)
        flaky = FlakyStore(db, failing={"D"})
        flaky.record_visits("alice", ["A", "B"])

        results = recommend(flaky, "alice")

        assert [r.business_id for r in results] == ["C"]

    def test_storage_down(self, broken_store):
        with pytest.raises(StorageError):
            recommend(broken_store, "alice")


# ==============================
# recommend_nearby
# ==============================
class TestRecommendNearby:

    def test_only_nearby_candidates(self, store, seed, yelp_business):
        seed(CATALOG)
        store.record_visits("alice", ["A", "B"])
        yelp = MagicMock()
        yelp.search_by_location.return_value = [yelp_business("D"), yelp_business("E")]

        results = recommend_nearby(store, yelp, "alice", 40.44, -79.94)

        assert [r.business_id for r in results] == ["D"]

    def test_new_nearby_restaurants_are_candidates(self, store, seed, yelp_business):
        seed(CATALOG)
        store.record_visits("alice", ["A", "B"])
        yelp = MagicMock()
        yelp.search_by_location.return_value = [yelp_business("F", categories=("Sushi Bars",))]

        results = recommend_nearby(store, yelp, "alice", 40.44, -79.94)

        # F was cached by the search and matches "Sushi" by substring
        assert [r.business_id for r in results] == ["F"]

    def test_nothing_nearby(self, store, seed):
        seed(CATALOG)
        store.record_visits("alice", ["A", "B"])
        yelp = MagicMock()
        yelp.search_by_location.return_value = []

        assert recommend_nearby(store, yelp, "alice", 40.44, -79.94) == []

    def test_yelp_unavailable(self, store, seed):
        seed(CATALOG)
        store.record_visits("alice", ["A", "B"])
        yelp = MagicMock()
        yelp.search_by_location.side_effect = ExternalServiceError("Yelp down")

        with pytest.raises(ExternalServiceError):
            recommend_nearby(store, yelp, "alice", 40.44, -79.94)
