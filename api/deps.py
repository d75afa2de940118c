"""
Shared FastAPI dependencies.
Override these in tests to swap the database or the Yelp client.
"""
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from services.record_store import RecordStore
from services.yelp_client import YelpClient


def get_record_store(db: Session = Depends(get_db)) -> RecordStore:
    """Record store bound to the request's session."""
    return RecordStore(db)


@lru_cache()
def get_yelp_client() -> YelpClient:
    """Process-wide Yelp client."""
    return YelpClient()
