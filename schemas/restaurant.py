"""
Pydantic schemas for Restaurant-related responses.
"""
from pydantic import BaseModel
from typing import Optional


class RestaurantBase(BaseModel):
    """Base restaurant schema with common fields."""
    business_id: str
    name: Optional[str] = None
    stars: Optional[float] = None

    class Config:
        from_attributes = True


class RestaurantResponse(RestaurantBase):
    """Restaurant record as returned by every read endpoint."""
    categories: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    full_address: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    image_url: Optional[str] = None
    url: Optional[str] = None
    is_visited: bool = False

    @classmethod
    def from_restaurant(cls, restaurant, is_visited: bool) -> "RestaurantResponse":
        """Build a response from a Restaurant model and a visited flag."""
        return cls(
            business_id=restaurant.business_id,
            name=restaurant.name,
            stars=restaurant.stars,
            categories=restaurant.categories,
            city=restaurant.city,
            state=restaurant.state,
            full_address=restaurant.full_address,
            latitude=restaurant.latitude,
            longitude=restaurant.longitude,
            image_url=restaurant.image_url,
            url=restaurant.url,
            is_visited=is_visited
        )
