"""Accessor for the per-day weather rows."""

from datetime import date
from typing import Any, Dict, List, Mapping

from trailblazer.models.base import Store

DAY_FIELDS = (
    "date",
    "temp_max",
    "temp_min",
    "temp",
    "humidity",
    "precipitation",
    "precip_prob",
    "wind_speed",
    "sunrise",
    "sunset",
    "conditions",
    "description",
    "icon",
)


class WeatherStore(Store):
    table = "weather"
    key = "id"
    columns = ("id", "trip_id") + DAY_FIELDS
    updatable = {field: field for field in DAY_FIELDS}
    label = "weather record"

    async def add(self, trip_id: int, day: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert one forecast day for a trip.

        ``day`` uses the column names of DAY_FIELDS; ``date`` may be a
        ``datetime.date`` or an ISO string.
        """
        day = dict(day)
        if isinstance(day.get("date"), str):
            day["date"] = date.fromisoformat(day["date"])
        marks = ", ".join(f"${i}" for i in range(1, len(DAY_FIELDS) + 2))

        return await self.db.fetch_one(
            f"""INSERT INTO weather (trip_id, {', '.join(DAY_FIELDS)})
                VALUES ({marks})
                RETURNING {self.projection}""",
            [trip_id, *(day.get(field) for field in DAY_FIELDS)],
        )

    async def get_all_for(self, trip_id: int) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(
            f"""SELECT {self.projection}
                FROM weather
                WHERE trip_id = $1
                ORDER BY date, id""",
            [trip_id],
        )
