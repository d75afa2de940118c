"""
SQLAlchemy model for Restaurant table.
"""
from typing import Set

from sqlalchemy import Column, String, Float

from core.database import Base


class Restaurant(Base):
    """Restaurant model representing the restaurants table."""

    __tablename__ = "restaurants"

    business_id = Column(String(255), primary_key=True, nullable=False, comment="Yelp business ID")
    name = Column(String(255), nullable=True)
    categories = Column(String(1024), nullable=True, comment="Comma-separated category titles")
    city = Column(String(255), nullable=True)
    state = Column(String(255), nullable=True)
    stars = Column(Float, nullable=True, comment="Star rating (0.0 ~ 5.0)")
    full_address = Column(String(500), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    image_url = Column(String(1024), nullable=True)
    url = Column(String(1024), nullable=True)

    def get_category_set(self) -> Set[str]:
        """Return the trimmed, non-empty category tokens."""
        return parse_categories(self.categories)

    def __repr__(self) -> str:
        return f"<Restaurant {self.business_id} {self.name!r}>"


def parse_categories(categories: str) -> Set[str]:
    """
    Split a comma-separated category string into trimmed tokens.

    "Sushi, Bars" -> {"Sushi", "Bars"}
    """
    if not categories:
        return set()
    return {token.strip() for token in categories.split(",") if token.strip()}
