"""Shared fixtures: a throwaway SQLite database, fake adapters and an API client."""
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from trailblazer.db import Database
from trailblazer.main import create_app
from trailblazer.models import (
    DestinationStore,
    ItineraryStore,
    TripStore,
    UserStore,
    WeatherStore,
)
from trailblazer.routes.deps import (
    get_countries_client,
    get_itinerary_generator,
    get_weather_client,
)
from trailblazer.utils.config import Settings
from trailblazer.utils.security import PasswordHasher

from tests.helpers import FRANCE, FakeCountries, FakeGenerator, FakeWeather, forecast_day


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        environment="test",
        log_level="WARNING",
        secret_key="test-secret",
        database_url_test=f"sqlite+aiosqlite:///{(tmp_path / 'test.db').as_posix()}",
        data_dir=str(tmp_path),
        weather_api_key=None,
        openai_api_key=None,
    )


@pytest.fixture
async def db(settings):
    database = Database.from_settings(settings)
    await database.connect()
    await database.create_schema()
    yield database
    await database.close()


@pytest.fixture
def hasher(settings) -> PasswordHasher:
    return PasswordHasher(settings.password_rounds)


@pytest.fixture
def users(db, hasher) -> UserStore:
    return UserStore(db, hasher)


@pytest.fixture
def trips(db) -> TripStore:
    return TripStore(db)


@pytest.fixture
def destinations(db) -> DestinationStore:
    return DestinationStore(db)


@pytest.fixture
def weather(db) -> WeatherStore:
    return WeatherStore(db)


@pytest.fixture
def itineraries(db) -> ItineraryStore:
    return ItineraryStore(db)


@pytest.fixture
async def user(users) -> Dict[str, Any]:
    return await users.register(
        username="traveller", password="password1", email="t@example.com", first_name="Tess"
    )


@pytest.fixture
def fake_countries() -> FakeCountries:
    return FakeCountries(FRANCE)


@pytest.fixture
def fake_weather() -> FakeWeather:
    return FakeWeather([forecast_day("2025-06-01"), forecast_day("2025-06-02", 23.0)])


@pytest.fixture
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture
def app(settings, fake_countries, fake_weather, fake_generator):
    application = create_app(settings)
    application.dependency_overrides[get_countries_client] = lambda: fake_countries
    application.dependency_overrides[get_weather_client] = lambda: fake_weather
    application.dependency_overrides[get_itinerary_generator] = lambda: fake_generator
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
