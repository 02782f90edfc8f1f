from datetime import date

import pytest

from trailblazer.tools.weather import (
    WEATHER_NO_CREDENTIALS,
    WEATHER_PLACEHOLDER,
    WEATHER_RATE_LIMITED,
    WeatherClient,
    prepare_weather_day,
)
from trailblazer.utils.exceptions import (
    BadRequestError,
    ConfigurationError,
    ExternalServiceError,
    RateLimitError,
)

from tests.helpers import FakeResponse, FakeSession

BASE_URL = "https://weather.example.com/timeline"

DAY = {
    "datetime": "2025-06-01",
    "tempmax": 25.5,
    "tempmin": 17.5,
    "temp": 21.5,
    "humidity": 60.0,
    "precip": 0.0,
    "precipprob": 10.0,
    "windspeed": 12.0,
    "sunrise": "05:47:00",
    "sunset": "21:50:00",
    "conditions": "Partially cloudy",
    "description": "Partly cloudy throughout the day.",
    "icon": "partly-cloudy-day",
}


def make_client(response=None, error=None, api_key="weather-key"):
    session = FakeSession(response, error)
    return WeatherClient(BASE_URL, api_key, timeout=5, session=session), session


def test_prepare_weather_day():
    assert prepare_weather_day(DAY) == {
        "date": "2025-06-01",
        "temp_max": 25.5,
        "temp_min": 17.5,
        "temp": 21.5,
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


async def test_fetch_forecast_request():
    client, session = make_client(FakeResponse(200, {"days": [DAY]}))
    days = await client.fetch_forecast("Paris", date(2025, 6, 1), date(2025, 6, 3))

    assert len(days) == 1
    assert days[0]["temp"] == 21.5
    call = session.calls[0]
    assert call["url"] == f"{BASE_URL}/Paris/2025-06-01/2025-06-03"
    assert call["params"] == {"unitGroup": "metric", "key": "weather-key", "contentType": "json"}


async def test_fetch_forecast_quotes_city():
    client, session = make_client(FakeResponse(200, {"days": [DAY]}))
    await client.fetch_forecast("New York", "2025-06-01", "2025-06-02")
    assert session.calls[0]["url"] == f"{BASE_URL}/New%20York/2025-06-01/2025-06-02"


async def test_fetch_forecast_skips_days_without_date():
    client, _ = make_client(FakeResponse(200, {"days": [DAY, {"temp": 3.0}]}))
    days = await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")
    assert [d["date"] for d in days] == ["2025-06-01"]


async def test_fetch_forecast_skips_days_with_unparseable_date():
    client, _ = make_client(FakeResponse(200, {"days": [{**DAY, "datetime": "June 2nd"}, DAY, None]}))
    days = await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")
    assert [d["date"] for d in days] == ["2025-06-01"]


async def test_fetch_forecast_with_no_dated_days():
    client, _ = make_client(FakeResponse(200, {"days": [{"temp": 3.0}, {"temp": 4.0}]}))
    with pytest.raises(ExternalServiceError) as exc_info:
        await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")
    assert exc_info.value.message == 'No usable forecast days for "Paris".'


async def test_fetch_forecast_without_key_makes_no_call():
    client, session = make_client(api_key=None)
    with pytest.raises(ConfigurationError):
        await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")
    assert session.calls == []


async def test_fetch_forecast_requires_arguments():
    client, session = make_client()
    with pytest.raises(BadRequestError):
        await client.fetch_forecast("", "2025-06-01", "2025-06-02")
    assert session.calls == []


async def test_fetch_forecast_without_days():
    client, _ = make_client(FakeResponse(200, {"days": []}))
    with pytest.raises(ExternalServiceError):
        await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")


async def test_fetch_forecast_rate_limited():
    client, _ = make_client(FakeResponse(429, headers={"Retry-After": "60"}))
    with pytest.raises(RateLimitError) as exc_info:
        await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")
    assert exc_info.value.retry_after == 60


async def test_fetch_forecast_invalid_json():
    client, _ = make_client(FakeResponse(200, None))
    with pytest.raises(ExternalServiceError):
        await client.fetch_forecast("Paris", "2025-06-01", "2025-06-02")


async def test_safely_success():
    client, _ = make_client(FakeResponse(200, {"days": [DAY]}))
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-01")
    assert result.ok
    assert result.payload[0]["conditions"] == "Partially cloudy"


async def test_safely_without_credentials():
    client, _ = make_client(api_key="")
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-02")
    assert not result.ok
    assert result.payload == {"message": WEATHER_NO_CREDENTIALS}


async def test_safely_rate_limited():
    client, _ = make_client(FakeResponse(429))
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-02")
    assert result.payload == {"message": WEATHER_RATE_LIMITED}


async def test_safely_quota_message_counts_as_rate_limit():
    client, _ = make_client(FakeResponse(400, text="Maximum daily cost exceeded: quota used"))
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-02")
    assert result.payload == {"message": WEATHER_RATE_LIMITED}


async def test_safely_generic_failure():
    client, _ = make_client(FakeResponse(500, text="Internal error"))
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-02")
    assert result.payload == {"message": WEATHER_PLACEHOLDER}
    assert result.payload == {"message": "Weather data unavailable."}


async def test_safely_when_days_are_not_objects():
    client, _ = make_client(FakeResponse(200, {"days": ["2025-06-01"]}))
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-01")
    assert not result.ok
    assert result.payload == {"message": WEATHER_PLACEHOLDER}


async def test_safely_when_no_day_has_a_date():
    client, _ = make_client(FakeResponse(200, {"days": [{"temp": 3.0}]}))
    result = await client.fetch_forecast_safely("Paris", "2025-06-01", "2025-06-01")
    assert not result.ok
    assert result.payload == {"message": WEATHER_PLACEHOLDER}
