"""Schemas module containing Pydantic request/response DTOs."""
from schemas.user import LoginRequest, LoginResponse, UserCreate, UserResponse
from schemas.restaurant import RestaurantBase, RestaurantResponse
from schemas.history import VisitHistoryRequest, VisitHistoryResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "UserCreate",
    "UserResponse",
    "RestaurantBase",
    "RestaurantResponse",
    "VisitHistoryRequest",
    "VisitHistoryResponse"
]
