"""
Pydantic schemas for the Trailblazer API
"""
from .requests import (
    TripCreateRequest,
    TripUpdateRequest,
    UserAuthRequest,
    UserRegisterRequest,
    UserUpdateRequest,
)
from .responses import (
    MessageResponse,
    Placeholder,
    Registration,
    Token,
    Trip,
    TripDetails,
    TripList,
    UpdatedTrip,
    User,
    UserEnvelope,
    WeatherDay,
)

__all__ = [
    # API request models
    "UserAuthRequest",
    "UserRegisterRequest",
    "UserUpdateRequest",
    "TripCreateRequest",
    "TripUpdateRequest",
    # API response models
    "User",
    "Trip",
    "WeatherDay",
    "Placeholder",
    "TripDetails",
    "TripList",
    "UpdatedTrip",
    "Token",
    "Registration",
    "UserEnvelope",
    "MessageResponse",
]
