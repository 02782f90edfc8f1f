"""Accessor for the per-trip destination snapshots."""

from typing import Any, Dict, List, Mapping, Optional

from trailblazer.models.base import Store

DETAIL_FIELDS = (
    "common_name",
    "official_name",
    "capital_city",
    "currencies",
    "languages",
    "region",
    "subregion",
    "population",
    "timezones",
    "flag",
    "google_maps",
    "car_side",
    "car_signs",
    "start_of_week",
    "independent",
    "un_member",
    "alt_spellings",
    "borders",
)


class DestinationStore(Store):
    """
    Country facts captured when a trip is created.

    A row either carries the facts or, when the lookup failed, only the
    placeholder ``message``.
    """

    table = "destinations"
    key = "id"
    columns = ("id", "trip_id", "country", "city") + DETAIL_FIELDS + ("message",)
    updatable = {field: field for field in ("country", "city") + DETAIL_FIELDS + ("message",)}
    label = "destination"

    async def add(
        self,
        trip_id: int,
        country: str,
        city: Optional[str],
        details: Mapping[str, Any],
    ) -> Dict[str, Any]:
        """
        Store the snapshot for a trip.

        ``details`` is either the projection from the country adapter or its
        placeholder ({"message": ...}); unknown keys are ignored.
        """
        fields = [f for f in DETAIL_FIELDS + ("message",) if details.get(f) is not None]
        cols = ["trip_id", "country", "city", *fields]
        params = [trip_id, country, city, *(details[f] for f in fields)]
        marks = ", ".join(f"${i}" for i in range(1, len(params) + 1))

        return await self.db.fetch_one(
            f"""INSERT INTO destinations ({', '.join(cols)})
                VALUES ({marks})
                RETURNING {self.projection}""",
            params,
        )

    async def get_all_for(self, trip_id: int) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(
            f"""SELECT {self.projection}
                FROM destinations
                WHERE trip_id = $1
                ORDER BY country, city""",
            [trip_id],
        )

    async def get_for_trip(self, trip_id: int) -> Dict[str, Any]:
        rows = await self.get_all_for(trip_id)
        if not rows:
            raise self.not_found(f"trip {trip_id}")
        return rows[0]
