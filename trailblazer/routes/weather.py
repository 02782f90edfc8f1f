"""
Weather routes: forecast days stored for a trip.
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from trailblazer.models import TripStore, WeatherStore
from trailblazer.routes.deps import ensure_logged_in, get_trip_store, get_weather_store
from trailblazer.schemas import WeatherDay

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("/details/{weather_id}")
async def get_weather_day(
    weather_id: int,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    weather: WeatherStore = Depends(get_weather_store),
    trips: TripStore = Depends(get_trip_store),
):
    day = await weather.get(weather_id)
    await trips.get(day["trip_id"], user["user_id"])
    return {"weather": WeatherDay(**day)}


@router.get("/{trip_id}")
async def get_trip_weather(
    trip_id: int,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    weather: WeatherStore = Depends(get_weather_store),
    trips: TripStore = Depends(get_trip_store),
):
    await trips.get(trip_id, user["user_id"])
    return {"weather": [WeatherDay(**day) for day in await weather.get_all_for(trip_id)]}
