"""
Recommendation API endpoints.
"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.deps import get_record_store, get_yelp_client
from schemas.restaurant import RestaurantResponse
from services.record_store import RecordStore
from services.recommend_service import recommend, recommend_nearby
from services.yelp_client import YelpClient

router = APIRouter(prefix="/recommendations", tags=["recommendations"])


@router.get("", response_model=List[RestaurantResponse])
def get_recommendations(
    user_id: str,
    lat: Optional[float] = Query(default=None, ge=-90, le=90),
    lon: Optional[float] = Query(default=None, ge=-180, le=180),
    store: RecordStore = Depends(get_record_store),
    client: YelpClient = Depends(get_yelp_client)
):
    """
    Recommend unvisited restaurants based on the user's favourite categories.

    When lat and lon are both given, only restaurants near that location
    are considered.
    """
    if (lat is None) != (lon is None):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="lat and lon must be given together"
        )

    if lat is not None:
        return recommend_nearby(store, client, user_id, lat, lon)

    return recommend(store, user_id)
