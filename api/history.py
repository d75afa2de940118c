"""
Visit history API endpoints.
"""
import logging
from typing import List
from fastapi import APIRouter, Depends

from api.deps import get_record_store
from schemas.history import VisitHistoryRequest, VisitHistoryResponse
from schemas.restaurant import RestaurantResponse
from services.record_store import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/history", tags=["history"])


@router.get("", response_model=List[RestaurantResponse])
def get_history(user_id: str, store: RecordStore = Depends(get_record_store)):
    """
    List the user's visited restaurants, most recent first.

    Visits to restaurants that were never cached are left out.
    """
    results = []
    for business_id in store.list_visited_by_time(user_id):
        restaurant = store.get_restaurant(business_id)
        if restaurant is None:
            logger.info("Visited restaurant %s has no stored record", business_id)
            continue
        results.append(RestaurantResponse.from_restaurant(restaurant, is_visited=True))
    return results


@router.post("", response_model=VisitHistoryResponse)
def add_history(request: VisitHistoryRequest, store: RecordStore = Depends(get_record_store)):
    """Record visits for the user."""
    store.record_visits(request.user_id, request.visited)
    return VisitHistoryResponse(user_id=request.user_id, count=len(set(request.visited)))


@router.delete("", response_model=VisitHistoryResponse)
def remove_history(request: VisitHistoryRequest, store: RecordStore = Depends(get_record_store)):
    """Remove visits for the user."""
    store.remove_visits(request.user_id, request.visited)
    return VisitHistoryResponse(user_id=request.user_id, count=len(set(request.visited)))
