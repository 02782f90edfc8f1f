"""API routers."""

from .auth import router as auth_router
from .destinations import router as destinations_router
from .trips import router as trips_router
from .users import router as users_router
from .weather import router as weather_router

__all__ = [
    "auth_router",
    "users_router",
    "trips_router",
    "destinations_router",
    "weather_router",
]
