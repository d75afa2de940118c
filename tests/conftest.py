"""
Shared pytest fixtures.
Every test gets a fresh in-memory SQLite database.
"""
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
os.environ.setdefault("DB_URL", "sqlite://")

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from core.database import Base
from models.restaurant import Restaurant
from services.record_store import RecordStore


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    yield session
    session.close()


@pytest.fixture
def store(db):
    return RecordStore(db)


@pytest.fixture
def broken_store():
    """Record store whose database connection is gone."""
    session = MagicMock()
    error = OperationalError("SELECT 1", {}, Exception("connection lost"))
    session.query.side_effect = error
    session.commit.side_effect = error
    return RecordStore(session)


@pytest.fixture
def make_restaurant():
    """Factory for unsaved Restaurant models."""
    def _make(business_id, categories="", stars=4.0, **fields):
        values = {
            "business_id": business_id,
            "name": f"Restaurant {business_id}",
            "categories": categories,
            "city": "Pittsburgh",
            "state": "PA",
            "stars": stars,
            "full_address": "1 Forbes Ave, Pittsburgh, PA 15213",
            "latitude": 40.44,
            "longitude": -79.94,
            "image_url": f"https://img.example.com/{business_id}.jpg",
            "url": f"https://www.yelp.com/biz/{business_id}"
        }
        values.update(fields)
        return Restaurant(**values)
    return _make


@pytest.fixture
def seed(store, make_restaurant):
    """Insert restaurants given as {business_id: categories}."""
    def _seed(catalog):
        for business_id, categories in catalog.items():
            store.upsert_restaurant(make_restaurant(business_id, categories))
    return _seed


@pytest.fixture
def yelp_business():
    """Factory for Yelp Fusion business payloads."""
    def _make(business_id, rating=4.0, categories=("Sushi Bars",), name=None):
        return {
            "id": business_id,
            "name": name or f"Yelp {business_id}",
            "categories": [{"alias": c.lower().replace(" ", ""), "title": c} for c in categories],
            "rating": rating,
            "location": {
                "city": "Pittsburgh",
                "state": "PA",
                "display_address": ["5 Craig St", "Pittsburgh, PA 15213"]
            },
            "coordinates": {"latitude": 40.45, "longitude": -79.95},
            "image_url": f"https://s3-media.example.com/{business_id}.jpg",
            "url": f"https://www.yelp.com/biz/{business_id}"
        }
    return _make
