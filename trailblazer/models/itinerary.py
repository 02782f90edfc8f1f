"""Accessor for generated itineraries."""

from typing import Any, Dict, List

from trailblazer.models.base import Store


class ItineraryStore(Store):
    table = "itineraries"
    key = "id"
    columns = ("id", "trip_id", "text")
    updatable = {"text": "text"}
    label = "itinerary"

    async def add(self, trip_id: int, text: str) -> Dict[str, Any]:
        return await self.db.fetch_one(
            f"INSERT INTO itineraries (trip_id, text) VALUES ($1, $2) RETURNING {self.projection}",
            [trip_id, text],
        )

    async def get_all_for(self, trip_id: int) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(
            f"SELECT {self.projection} FROM itineraries WHERE trip_id = $1 ORDER BY id",
            [trip_id],
        )

    async def get_for_trip(self, trip_id: int) -> Dict[str, Any]:
        rows = await self.get_all_for(trip_id)
        if not rows:
            raise self.not_found(f"trip {trip_id}")
        return rows[0]
