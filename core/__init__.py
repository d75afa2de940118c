"""Core module containing configuration, database setup and error types."""
from core.config import settings
from core.database import Base, get_db, engine, SessionLocal, init_db, close_db
from core.exceptions import (
    RestaurantServiceError,
    StorageError,
    ExternalServiceError,
    NotFoundError,
    DuplicateUserError
)

__all__ = [
    "settings",
    "Base",
    "get_db",
    "engine",
    "SessionLocal",
    "init_db",
    "close_db",
    "RestaurantServiceError",
    "StorageError",
    "ExternalServiceError",
    "NotFoundError",
    "DuplicateUserError"
]
