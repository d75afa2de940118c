"""
Nearby restaurant search.
Calls Yelp, caches every result in the record store and tags visited ones.
"""
import logging
from typing import List, Optional

from core.exceptions import ExternalServiceError
from schemas.restaurant import RestaurantResponse
from services.record_store import RecordStore
from services.yelp_client import YelpClient, restaurant_from_business

logger = logging.getLogger(__name__)


class NearbySearchResult:
    """Data class for nearby search results."""
    def __init__(self, restaurants: List[RestaurantResponse],
                 available: bool = True,
                 error: Optional[str] = None):
        self.restaurants = restaurants
        self.available = available
        self.error = error

    @property
    def business_ids(self) -> set:
        return {r.business_id for r in self.restaurants}


def search_nearby(
    store: RecordStore,
    client: YelpClient,
    user_id: str,
    lat: float,
    lon: float
) -> NearbySearchResult:
    """
    Search restaurants around a location for a user.

    Process:
    1. Load the user's visited set
    2. Query Yelp and normalize each business
    3. Insert unseen restaurants into the record store
    4. Order by star rating, highest first, keeping API order within a rating

    A Yelp failure yields an empty result with available=False.
    Storage failures propagate as StorageError.
    """
    visited = store.list_visited(user_id)

    try:
        businesses = client.search_by_location(lat, lon)
        restaurants = [restaurant_from_business(b) for b in businesses]
    except ExternalServiceError as e:
        logger.warning("Nearby search unavailable for (%s, %s): %s", lat, lon, e)
        return NearbySearchResult([], available=False, error=str(e))

    results: List[RestaurantResponse] = []
    for restaurant in restaurants:
        # Build the view before the model is attached to the session
        results.append(RestaurantResponse.from_restaurant(
            restaurant,
            is_visited=restaurant.business_id in visited
        ))
        store.upsert_restaurant(restaurant)

    # sorted() is stable, so equal ratings keep API order
    results = sorted(results, key=lambda r: r.stars if r.stars is not None else -1.0, reverse=True)

    return NearbySearchResult(results)
