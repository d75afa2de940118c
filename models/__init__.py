"""Models module containing SQLAlchemy ORM models."""
from models.user import User
from models.restaurant import Restaurant, parse_categories
from models.history import History

__all__ = ["User", "Restaurant", "History", "parse_categories"]
