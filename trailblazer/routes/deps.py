"""
Request dependencies: shared clients from app state, table accessors and
the authentication gates.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from trailblazer.db import Database
from trailblazer.models import DestinationStore, ItineraryStore, TripStore, UserStore, WeatherStore
from trailblazer.services import TripPlanner
from trailblazer.tools import CountriesClient, ItineraryGenerator, WeatherClient
from trailblazer.utils.exceptions import UnauthorizedError
from trailblazer.utils.security import PasswordHasher, TokenManager

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_manager(request: Request) -> TokenManager:
    return request.app.state.tokens


def get_countries_client(request: Request) -> CountriesClient:
    return request.app.state.countries


def get_weather_client(request: Request) -> WeatherClient:
    return request.app.state.weather


def get_itinerary_generator(request: Request) -> ItineraryGenerator:
    return request.app.state.itinerary


def get_user_store(
    db: Database = Depends(get_database),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> UserStore:
    return UserStore(db, hasher)


def get_trip_store(db: Database = Depends(get_database)) -> TripStore:
    return TripStore(db)


def get_destination_store(db: Database = Depends(get_database)) -> DestinationStore:
    return DestinationStore(db)


def get_weather_store(db: Database = Depends(get_database)) -> WeatherStore:
    return WeatherStore(db)


def get_itinerary_store(db: Database = Depends(get_database)) -> ItineraryStore:
    return ItineraryStore(db)


def get_trip_planner(
    trips: TripStore = Depends(get_trip_store),
    destinations: DestinationStore = Depends(get_destination_store),
    weather: WeatherStore = Depends(get_weather_store),
    itineraries: ItineraryStore = Depends(get_itinerary_store),
    countries: CountriesClient = Depends(get_countries_client),
    forecasts: WeatherClient = Depends(get_weather_client),
    generator: ItineraryGenerator = Depends(get_itinerary_generator),
) -> TripPlanner:
    return TripPlanner(trips, destinations, weather, itineraries, countries, forecasts, generator)


async def authenticate_jwt(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenManager = Depends(get_token_manager),
) -> Optional[Dict[str, Any]]:
    """
    Decode the bearer token if one was sent.

    A missing or invalid token leaves the request anonymous (None); routes
    that need a user add ``ensure_logged_in`` or ``ensure_correct_user``.
    """
    if credentials is None:
        return None
    try:
        return tokens.decode_token(credentials.credentials)
    except UnauthorizedError as e:
        logger.warning(f"JWT authentication failed: {e.message}")
        return None


async def ensure_logged_in(
    user: Optional[Dict[str, Any]] = Depends(authenticate_jwt),
) -> Dict[str, Any]:
    if not user:
        logger.warning("Unauthorized access attempt.")
        raise UnauthorizedError("User must be logged in")
    return user


async def ensure_correct_user(
    username: str,
    user: Optional[Dict[str, Any]] = Depends(authenticate_jwt),
) -> Dict[str, Any]:
    """The token's username must match the ``username`` path parameter."""
    if not user or user.get("username") != username:
        raise UnauthorizedError("You are not authorized to access this resource")
    return user
