"""
External data adapters.

This package contains the third-party API clients used to enrich trips:
- Country facts (REST Countries)
- Weather forecasts (Visual Crossing)
- AI itinerary generation (OpenAI)
"""

from .countries import COUNTRY_PLACEHOLDER, CountriesClient, prepare_country_details
from .itinerary import ItineraryGenerator, build_prompt, format_itinerary
from .results import FetchResult
from .weather import WEATHER_PLACEHOLDER, WeatherClient, prepare_weather_day

__all__ = [
    "FetchResult",
    "CountriesClient",
    "COUNTRY_PLACEHOLDER",
    "prepare_country_details",
    "WeatherClient",
    "WEATHER_PLACEHOLDER",
    "prepare_weather_day",
    "ItineraryGenerator",
    "build_prompt",
    "format_itinerary",
]
