"""Services module containing business logic."""
from services.record_store import RecordStore, hash_password, check_password
from services.yelp_client import YelpClient, restaurant_from_business
from services.search_service import search_nearby, NearbySearchResult
from services.recommend_service import (
    recommend,
    recommend_nearby,
    build_category_frequency,
    rank_categories,
    collect_candidates
)

__all__ = [
    "RecordStore",
    "hash_password",
    "check_password",
    "YelpClient",
    "restaurant_from_business",
    "search_nearby",
    "NearbySearchResult",
    "recommend",
    "recommend_nearby",
    "build_category_frequency",
    "rank_categories",
    "collect_candidates"
]
