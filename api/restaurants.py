"""
Restaurant API endpoints.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from api.deps import get_record_store, get_yelp_client
from core.exceptions import ExternalServiceError, NotFoundError
from schemas.restaurant import RestaurantResponse
from services.record_store import RecordStore
from services.search_service import search_nearby
from services.yelp_client import YelpClient

router = APIRouter(prefix="/restaurants", tags=["restaurants"])


@router.get("", response_model=List[RestaurantResponse])
def search_restaurants(
    user_id: str,
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    store: RecordStore = Depends(get_record_store),
    client: YelpClient = Depends(get_yelp_client)
):
    """
    Search restaurants near a location.

    Results are ordered by star rating, highest first, and flagged with
    is_visited for the given user. Every result is cached locally.
    """
    result = search_nearby(store, client, user_id, lat, lon)

    if not result.available:
        raise ExternalServiceError(result.error or "Nearby search unavailable")

    return result.restaurants


@router.get("/{business_id}", response_model=RestaurantResponse)
def get_restaurant(
    business_id: str,
    user_id: Optional[str] = None,
    store: RecordStore = Depends(get_record_store)
):
    """Get a cached restaurant by business_id."""
    restaurant = store.get_restaurant(business_id)

    if restaurant is None:
        raise NotFoundError(f"Restaurant with business_id {business_id} not found")

    is_visited = bool(user_id) and business_id in store.list_visited(user_id)
    return RestaurantResponse.from_restaurant(restaurant, is_visited=is_visited)
