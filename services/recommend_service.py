"""
Restaurant recommendation service.
Ranks categories from the user's visit history and suggests unvisited
restaurants sharing those categories.
"""
import logging
from collections import Counter
from typing import Iterable, List, Optional, Set

from core.config import settings
from core.exceptions import ExternalServiceError, StorageError
from schemas.restaurant import RestaurantResponse
from services.record_store import RecordStore
from services.search_service import search_nearby
from services.yelp_client import YelpClient

logger = logging.getLogger(__name__)


def build_category_frequency(store: RecordStore, business_ids: Iterable[str]) -> Counter:
    """
    Count category tokens across restaurants.

    A category shared by two visited restaurants counts twice.
    """
    frequency: Counter = Counter()
    for business_id in business_ids:
        frequency.update(store.get_categories(business_id))
    return frequency


def rank_categories(frequency: Counter) -> List[str]:
    """Sort categories by count descending, ties alphabetically."""
    return [category for category, _ in sorted(frequency.items(), key=lambda x: (-x[1], x[0]))]


def collect_candidates(
    store: RecordStore,
    categories: List[str],
    visited: Set[str],
    limit: int,
    allowed: Optional[Set[str]] = None,
    exact: bool = False
) -> List[str]:
    """
    Expand ranked categories into candidate business IDs.

    Args:
        store: Record store
        categories: Categories in ranked order
        visited: IDs to exclude
        limit: Maximum number of candidates
        allowed: If given, only IDs in this set are kept
        exact: Whole-token category matching

    Returns:
        Unvisited business IDs in category rank order, at most limit long
    """
    seen: Set[str] = set()
    candidates: List[str] = []
    if limit <= 0:
        return candidates

    for category in categories:
        for business_id in sorted(store.get_business_ids_by_category(category, exact=exact)):
            if business_id in seen:
                continue
            seen.add(business_id)
            if allowed is not None and business_id not in allowed:
                continue
            if business_id in visited:
                continue
            candidates.append(business_id)
            if len(candidates) >= limit:
                return candidates

    return candidates


def _enrich(store: RecordStore, business_ids: List[str]) -> List[RestaurantResponse]:
    results = []
    for business_id in business_ids:
        try:
            restaurant = store.get_restaurant(business_id)
        except StorageError:
            logger.warning("Skipping recommendation %s, lookup failed", business_id)
            continue
        if restaurant is None:
            logger.warning("Skipping recommendation %s, no stored record", business_id)
            continue
        results.append(RestaurantResponse.from_restaurant(restaurant, is_visited=False))
    return results


def _recommend(
    store: RecordStore,
    user_id: str,
    limit: int,
    allowed: Optional[Set[str]] = None
) -> List[RestaurantResponse]:
    visited = store.list_visited(user_id)
    if not visited:
        return []

    frequency = build_category_frequency(store, visited)
    categories = rank_categories(frequency)

    candidates = collect_candidates(
        store,
        categories,
        visited,
        limit,
        allowed=allowed,
        exact=settings.CATEGORY_EXACT_MATCH
    )
    return _enrich(store, candidates)


def recommend(
    store: RecordStore,
    user_id: str,
    limit: Optional[int] = None
) -> List[RestaurantResponse]:
    """
    Recommend unvisited restaurants from the user's favourite categories.

    Process:
    1. Load the visited set
    2. Count categories across visited restaurants
    3. Rank categories by count
    4. Expand each category into restaurants, skipping visited ones
    5. Keep the first `limit` and load their records

    Raises:
        StorageError: If the visit history cannot be read
    """
    return _recommend(store, user_id, settings.MAX_RECOMMENDED if limit is None else limit)


def recommend_nearby(
    store: RecordStore,
    client: YelpClient,
    user_id: str,
    lat: float,
    lon: float,
    limit: Optional[int] = None
) -> List[RestaurantResponse]:
    """
    Same as recommend, restricted to restaurants Yelp reports near (lat, lon).

    Raises:
        ExternalServiceError: If the nearby search is unavailable
        StorageError: If the visit history cannot be read
    """
    nearby = search_nearby(store, client, user_id, lat, lon)
    if not nearby.available:
        raise ExternalServiceError(nearby.error or "Nearby search unavailable")

    return _recommend(
        store,
        user_id,
        settings.MAX_RECOMMENDED if limit is None else limit,
        allowed=nearby.business_ids
    )
