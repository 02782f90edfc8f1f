"""
Trip creation and retrieval.

Creating a trip writes the trip row and then enriches it, in order, with a
country snapshot, a weather forecast and a generated itinerary. The three
enrichment steps are best-effort: each one stores a placeholder when its
upstream fails and none of them can undo the trip row or an earlier step.
"""

from datetime import date
from typing import Any, Dict, List, Mapping, Union

from trailblazer.models import (
    TRIP_FIELDS,
    DestinationStore,
    ItineraryStore,
    TripStore,
    WeatherStore,
)
from trailblazer.tools import CountriesClient, ItineraryGenerator, WeatherClient
from trailblazer.tools.countries import COUNTRY_PLACEHOLDER
from trailblazer.tools.itinerary import ITINERARY_FAILED
from trailblazer.tools.weather import WEATHER_PLACEHOLDER
from trailblazer.utils.exceptions import BadRequestError
from trailblazer.utils.logger import get_logger

logger = get_logger(__name__)

TripView = Dict[str, Any]


def validate_trip_input(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Check that every trip field is present and the dates are usable.

    Returns a copy with ``start_date``/``end_date`` as ``datetime.date``.

    Raises:
        BadRequestError: On a missing field, unparseable date, or an end date
            before the start date
    """
    missing = [
        field for field in TRIP_FIELDS
        if data.get(field) is None or (isinstance(data.get(field), str) and not data[field].strip())
    ]
    if missing:
        raise BadRequestError(f"Missing required fields: {', '.join(missing)}")

    cleaned = {field: data[field] for field in TRIP_FIELDS}
    for field in ("start_date", "end_date"):
        value = cleaned[field]
        if isinstance(value, str):
            try:
                cleaned[field] = date.fromisoformat(value.strip())
            except ValueError as e:
                raise BadRequestError(f"Invalid {field}: {value}. Use YYYY-MM-DD.") from e

    if cleaned["end_date"] < cleaned["start_date"]:
        raise BadRequestError("End date cannot be before start date.")

    return cleaned


def destination_view(row: Mapping[str, Any]) -> Dict[str, Any]:
    if row.get("message"):
        return {"message": row["message"]}
    view = {key: value for key, value in row.items() if key != "message"}
    # SQLite hands booleans back as 0/1
    for flag in ("independent", "un_member"):
        if view.get(flag) is not None:
            view[flag] = bool(view[flag])
    return view


class TripPlanner:
    """Builds and reassembles the {trip, destination, weather, itinerary} view."""

    def __init__(
        self,
        trips: TripStore,
        destinations: DestinationStore,
        weather: WeatherStore,
        itineraries: ItineraryStore,
        countries: CountriesClient,
        forecasts: WeatherClient,
        generator: ItineraryGenerator,
    ):
        self.trips = trips
        self.destinations = destinations
        self.weather = weather
        self.itineraries = itineraries
        self.countries = countries
        self.forecasts = forecasts
        self.generator = generator

    async def create(self, user_id: int, data: Mapping[str, Any]) -> TripView:
        """
        Create a trip for ``user_id`` and attach its enrichment data.

        Raises:
            BadRequestError: If input is missing or invalid
            DuplicateNameError: If the user already has a trip with this name
        """
        trip_data = validate_trip_input(data)
        log = logger.bind(user_id=user_id, trip_name=trip_data["trip_name"])

        trip = await self.trips.add(user_id, trip_data)
        trip_id = trip["id"]
        log = log.bind(trip_id=trip_id)
        log.info("trip_created")

        city = trip_data["location_city"]
        country = trip_data["location_country"]
        start_date, end_date = trip_data["start_date"], trip_data["end_date"]

        country_result = await self.countries.lookup_safely(country)
        stored = await self.destinations.add(trip_id, country, city, country_result.payload)
        destination = destination_view(stored)
        log.info("destination_stored", ok=country_result.ok, error=country_result.error)

        forecast = await self.forecasts.fetch_forecast_safely(city, start_date, end_date)
        weather: Union[List[Dict[str, Any]], Dict[str, Any]]
        if forecast.ok:
            weather = [await self.weather.add(trip_id, day) for day in forecast.payload]
        else:
            weather = forecast.payload
        log.info("weather_stored", ok=forecast.ok, days=len(weather) if forecast.ok else 0)

        itinerary = await self.generator.generate(
            city, country, trip_data["interests"], start_date, end_date
        )
        await self.itineraries.add(trip_id, itinerary.payload)
        log.info("itinerary_stored", ok=itinerary.ok, error=itinerary.error)

        return {
            "trip": trip,
            "destination": destination,
            "weather": weather,
            "itinerary": itinerary.payload,
        }

    async def get(self, trip_id: int, user_id: int) -> TripView:
        """
        Re-read a trip and everything stored alongside it.

        Missing enrichment rows are reported with the same placeholders
        creation uses.

        Raises:
            NotFoundError: If the trip does not exist or belongs to someone else
        """
        trip = await self.trips.get(trip_id, user_id)

        destinations = await self.destinations.get_all_for(trip_id)
        destination = destination_view(destinations[0]) if destinations else dict(COUNTRY_PLACEHOLDER)

        weather: Union[List[Dict[str, Any]], Dict[str, Any]]
        weather = await self.weather.get_all_for(trip_id)
        if not weather:
            weather = {"message": WEATHER_PLACEHOLDER}

        itineraries = await self.itineraries.get_all_for(trip_id)
        itinerary = itineraries[0]["text"] if itineraries else ITINERARY_FAILED

        return {
            "trip": trip,
            "destination": destination,
            "weather": weather,
            "itinerary": itinerary,
        }
