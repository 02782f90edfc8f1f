"""
Table accessors.

Each accessor wraps one table and is constructed with the shared
``Database``. Keyed lookups raise ``NotFoundError`` instead of returning None.
"""

from .base import Store
from .destination import DestinationStore
from .itinerary import ItineraryStore
from .trip import TRIP_FIELDS, TripStore
from .user import UserStore
from .weather import WeatherStore

__all__ = [
    "Store",
    "UserStore",
    "TripStore",
    "TRIP_FIELDS",
    "DestinationStore",
    "WeatherStore",
    "ItineraryStore",
]
