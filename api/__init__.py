"""API module containing endpoint routers."""
from api.users import router as users_router
from api.restaurants import router as restaurants_router
from api.history import router as history_router
from api.recommendations import router as recommendations_router

__all__ = ["users_router", "restaurants_router", "history_router", "recommendations_router"]
