"""
Pydantic schemas for API responses.
"""
import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field


class User(BaseModel):
    """Public user profile; never includes the password hash"""
    id: int
    username: str
    email: str
    first_name: str


class Trip(BaseModel):
    id: int
    user_id: int
    trip_name: str
    start_date: datetime.date
    end_date: datetime.date
    location_city: str
    location_country: str
    interests: str


class WeatherDay(BaseModel):
    """One forecast day stored for a trip"""
    id: int
    trip_id: int
    date: datetime.date
    temp_max: Optional[float] = None
    temp_min: Optional[float] = None
    temp: Optional[float] = None
    humidity: Optional[float] = None
    precipitation: Optional[float] = None
    precip_prob: Optional[float] = None
    wind_speed: Optional[float] = None
    sunrise: Optional[str] = None
    sunset: Optional[str] = None
    conditions: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


class Placeholder(BaseModel):
    """Stands in for enrichment data that could not be fetched"""
    message: str


class TripDetails(BaseModel):
    """A trip with its destination facts, forecast and itinerary"""
    trip: Trip
    destination: Dict[str, Any] = Field(..., description="Country facts, or {message} placeholder")
    weather: Union[List[WeatherDay], Placeholder]
    itinerary: str

    class Config:
        json_schema_extra = {
            "example": {
                "trip": {
                    "id": 1,
                    "user_id": 7,
                    "trip_name": "Paris Trip",
                    "start_date": "2025-06-01",
                    "end_date": "2025-06-10",
                    "location_city": "Paris",
                    "location_country": "France",
                    "interests": "art, food",
                },
                "destination": {"common_name": "France", "capital_city": "Paris"},
                "weather": {"message": "Weather data unavailable."},
                "itinerary": "**Day 1: Arrival & City Highlights**\n- **Morning:** Visit the Louvre",
            }
        }


class TripList(BaseModel):
    trips: List[Trip]


class UpdatedTrip(BaseModel):
    updatedTrip: Trip


class Token(BaseModel):
    token: str


class Registration(BaseModel):
    token: str
    user: User


class UserEnvelope(BaseModel):
    user: User


class MessageResponse(BaseModel):
    message: str
