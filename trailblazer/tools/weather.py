"""Day-by-day forecasts from the Visual Crossing timeline API."""

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Union
from urllib.parse import quote

import requests

from trailblazer.tools.http import HTTPClient
from trailblazer.tools.results import FetchResult
from trailblazer.utils.exceptions import (
    BadRequestError,
    ConfigurationError,
    ExternalServiceError,
    RateLimitError,
    TrailblazerError,
)

logger = logging.getLogger(__name__)

WEATHER_PLACEHOLDER = "Weather data unavailable."
WEATHER_RATE_LIMITED = "Sorry, we've hit our weather request limit. Please try again later."
WEATHER_NO_CREDENTIALS = "Weather data is currently unavailable due to missing API credentials."

DateLike = Union[date, str]


def prepare_weather_day(day: Dict[str, Any]) -> Dict[str, Any]:
    """Map a Visual Crossing ``days[]`` entry onto the weather columns."""
    return {
        "date": day.get("datetime"),
        "temp_max": day.get("tempmax"),
        "temp_min": day.get("tempmin"),
        "temp": day.get("temp"),
        "humidity": day.get("humidity"),
        "precipitation": day.get("precip"),
        "precip_prob": day.get("precipprob"),
        "wind_speed": day.get("windspeed"),
        "sunrise": day.get("sunrise"),
        "sunset": day.get("sunset"),
        "conditions": day.get("conditions"),
        "description": day.get("description"),
        "icon": day.get("icon"),
    }


def _has_date(day: Any) -> bool:
    """True for a ``days[]`` entry carrying an ISO ``datetime``."""
    if not isinstance(day, dict) or not isinstance(day.get("datetime"), str):
        return False
    try:
        date.fromisoformat(day["datetime"])
    except ValueError:
        return False
    return True


class WeatherClient(HTTPClient):
    """Client for the Visual Crossing weather API."""

    service_name = "Visual Crossing"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str],
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        super().__init__(base_url, timeout=timeout, session=session)
        self.api_key = api_key
        if not api_key:
            logger.warning("WEATHER_API_KEY is missing. Weather data retrieval will not work.")

    async def fetch_forecast(
        self, city: str, start_date: DateLike, end_date: DateLike
    ) -> List[Dict[str, Any]]:
        """
        Forecast for ``city`` between the two dates, one dict per day.

        Raises:
            ConfigurationError: If no API key is configured (no call is made)
            BadRequestError: If an argument is missing
            ExternalServiceError: If the upstream fails or returns no days
        """
        if not self.api_key:
            raise ConfigurationError(WEATHER_NO_CREDENTIALS)
        if not city or not start_date or not end_date:
            raise BadRequestError("City, start date, and end date are required.")

        url = f"{self.base_url}/{quote(city, safe='')}/{start_date}/{end_date}"
        params = {"unitGroup": "metric", "key": self.api_key, "contentType": "json"}

        logger.info(f"Fetching weather for {city} ({start_date} - {end_date})")
        data = await self.get_json(url, params=params)
        days = data.get("days") if isinstance(data, dict) else None
        if not isinstance(days, list) or not days:
            raise ExternalServiceError(f'No weather data found for "{city}".')

        # days without a date cannot be stored
        forecast = [prepare_weather_day(day) for day in days if _has_date(day)]
        if not forecast:
            raise ExternalServiceError(f'No usable forecast days for "{city}".')
        return forecast

    async def fetch_forecast_safely(
        self, city: str, start_date: DateLike, end_date: DateLike
    ) -> FetchResult:
        """Like ``fetch_forecast`` but failures come back as a placeholder object."""
        try:
            return FetchResult.success(await self.fetch_forecast(city, start_date, end_date))
        except ConfigurationError as e:
            return FetchResult.unavailable({"message": WEATHER_NO_CREDENTIALS}, e.message)
        except TrailblazerError as e:
            logger.error(
                f"Failed to retrieve weather data: city={city} start={start_date} "
                f"end={end_date} error={e.message}"
            )
            text = e.message.lower()
            if isinstance(e, RateLimitError) or "quota" in text or "limit" in text:
                return FetchResult.unavailable({"message": WEATHER_RATE_LIMITED}, e.message)
            return FetchResult.unavailable({"message": WEATHER_PLACEHOLDER}, e.message)
