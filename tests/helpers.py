"""Test doubles and request helpers shared by the test modules."""
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from fastapi.testclient import TestClient

from trailblazer.tools import FetchResult
from trailblazer.tools.countries import COUNTRY_PLACEHOLDER
from trailblazer.tools.weather import WEATHER_PLACEHOLDER

PARIS_TRIP = {
    "trip_name": "Paris Trip",
    "start_date": "2025-06-01",
    "end_date": "2025-06-03",
    "location_city": "Paris",
    "location_country": "France",
    "interests": "art, food",
}

FRANCE = {
    "common_name": "France",
    "official_name": "French Republic",
    "capital_city": "Paris",
    "currencies": "Euro (€)",
    "languages": "French",
    "region": "Europe",
    "subregion": "Western Europe",
    "population": 67391582,
    "timezones": "UTC-10:00, UTC+01:00",
    "flag": "https://flagcdn.com/fr.svg",
    "google_maps": "https://goo.gl/maps/g7QxxSFsWyTPKuzd7",
    "car_side": "right",
    "car_signs": "F",
    "start_of_week": "monday",
    "independent": True,
    "un_member": True,
    "alt_spellings": "FR, French Republic",
    "borders": "AND, BEL, DEU, ITA, LUX, MCO, ESP, CHE",
}


def forecast_day(day: str, temp: float = 21.5) -> Dict[str, Any]:
    return {
        "date": day,
        "temp_max": temp + 4,
        "temp_min": temp - 4,
        "temp": temp,
        "humidity": 60.0,
        "precipitation": 0.0,
        "precip_prob": 10.0,
        "wind_speed": 12.0,
        "sunrise": "05:47:00",
        "sunset": "21:50:00",
        "conditions": "Partially cloudy",
        "description": "Partly cloudy throughout the day.",
        "icon": "partly-cloudy-day",
    }


class FakeCountries:
    def __init__(self, details: Optional[Dict[str, Any]] = None):
        self.details = details
        self.calls: List[str] = []

    async def lookup_safely(self, country_name: str) -> FetchResult:
        self.calls.append(country_name)
        if self.details is None:
            return FetchResult.unavailable(dict(COUNTRY_PLACEHOLDER), "lookup failed")
        return FetchResult.success(dict(self.details))

    async def lookup(self, country_name: str) -> Dict[str, Any]:
        return dict(self.details or {})

    async def search_countries(self, partial_name: str, limit: int = 10) -> List[str]:
        return ["France", "French Polynesia"][:limit]


class FakeWeather:
    def __init__(self, days: Optional[List[Dict[str, Any]]] = None):
        self.days = days
        self.calls: List[tuple] = []

    async def fetch_forecast_safely(self, city, start_date, end_date) -> FetchResult:
        self.calls.append((city, start_date, end_date))
        if not self.days:
            return FetchResult.unavailable({"message": WEATHER_PLACEHOLDER}, "no days")
        return FetchResult.success([dict(day) for day in self.days])


class FakeGenerator:
    def __init__(self, text: str = "**Day 1: Arrival**\n- **Morning:** Visit the Louvre", ok: bool = True):
        self.text = text
        self.ok = ok
        self.calls: List[tuple] = []

    async def generate(self, city, country, interests, start_date, end_date) -> FetchResult:
        self.calls.append((city, country, interests, start_date, end_date))
        if self.ok:
            return FetchResult.success(self.text)
        return FetchResult.unavailable(self.text, "generation failed")


class FakeResponse:
    def __init__(self, status_code: int = 200, json_data: Any = None, headers=None, text: str = ""):
        self.status_code = status_code
        self._json = json_data
        self.headers = headers or {}
        self.text = text

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeSession:
    """Stands in for requests.Session; records every GET."""

    def __init__(self, response: Optional[FakeResponse] = None, error: Optional[Exception] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


def fake_openai(content: Optional[str] = None, error: Optional[Exception] = None):
    """Minimal object with the ``chat.completions.create`` shape of AsyncOpenAI."""
    calls: List[Dict[str, Any]] = []

    async def create(**kwargs):
        calls.append(kwargs)
        if error is not None:
            raise error
        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
    client.calls = calls
    return client


def register(client: TestClient, username: str = "traveller", password: str = "password1") -> str:
    response = client.post(
        "/auth/register",
        json={
            "username": username,
            "password": password,
            "first_name": username.title(),
            "email": f"{username}@example.com",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["token"]


def auth(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
