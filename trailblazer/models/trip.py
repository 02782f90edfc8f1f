"""Accessor for the trips table."""

import logging
from datetime import date
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import IntegrityError

from trailblazer.models.base import Store
from trailblazer.utils.exceptions import BadRequestError, DuplicateNameError

logger = logging.getLogger(__name__)

TRIP_FIELDS = (
    "trip_name",
    "start_date",
    "end_date",
    "location_city",
    "location_country",
    "interests",
)


def _as_date(value) -> date:
    return value if isinstance(value, date) else date.fromisoformat(str(value)[:10])


class TripStore(Store):
    """Trips, always scoped to the owning user."""

    table = "trips"
    key = "id"
    columns = ("id", "user_id") + TRIP_FIELDS
    updatable = {field: field for field in TRIP_FIELDS}
    label = "trip"

    async def name_taken(self, user_id: int, trip_name: str) -> bool:
        row = await self.db.fetch_one(
            "SELECT id FROM trips WHERE user_id = $1 AND trip_name = $2",
            [user_id, trip_name],
        )
        return row is not None

    async def add(self, user_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Insert a trip for ``user_id``.

        The name pre-check gives an early, friendly error; the unique
        constraint on (user_id, trip_name) is what actually guarantees that two
        concurrent requests cannot both insert.

        Returns:
            { id, user_id, trip_name, start_date, end_date, location_city,
              location_country, interests }

        Raises:
            DuplicateNameError: If the user already has a trip with this name
        """
        trip_name = data["trip_name"]
        if await self.name_taken(user_id, trip_name):
            raise DuplicateNameError(f"Duplicate trip name: {trip_name}")

        try:
            return await self.db.fetch_one(
                f"""INSERT INTO trips
                    (user_id, trip_name, start_date, end_date, location_city, location_country, interests)
                    VALUES ($1, $2, $3, $4, $5, $6, $7)
                    RETURNING {self.projection}""",
                [user_id, *(data[field] for field in TRIP_FIELDS)],
            )
        except IntegrityError as e:
            raise await self._translate_conflict(e, user_id, trip_name) from e

    async def get_all_for(self, user_id: int) -> List[Dict[str, Any]]:
        return await self.db.fetch_all(
            f"""SELECT {self.projection}
                FROM trips
                WHERE user_id = $1
                ORDER BY start_date, id""",
            [user_id],
        )

    async def get(self, trip_id: int, user_id: int = None) -> Dict[str, Any]:
        """
        Fetch one trip. With ``user_id`` the trip must also belong to that user;
        another user's trip is reported as not found.
        """
        if user_id is None:
            return await super().get(trip_id)

        row = await self.db.fetch_one(
            f"SELECT {self.projection} FROM trips WHERE id = $1 AND user_id = $2",
            [trip_id, user_id],
        )
        if row is None:
            raise self.not_found(trip_id)
        return row

    async def update(self, trip_id: int, user_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        unknown = set(data) - set(TRIP_FIELDS)
        if unknown:
            raise BadRequestError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        if "start_date" in data or "end_date" in data:
            current = await self.get(trip_id, user_id)
            start = _as_date(data.get("start_date", current["start_date"]))
            end = _as_date(data.get("end_date", current["end_date"]))
            if end < start:
                raise BadRequestError("End date cannot be before start date.")

        try:
            return await super().update(trip_id, data, owner=("user_id", user_id))
        except IntegrityError as e:
            raise await self._translate_conflict(e, user_id, data.get("trip_name")) from e

    async def remove(self, trip_id: int, user_id: int) -> None:
        await super().remove(trip_id, owner=("user_id", user_id))

    async def _translate_conflict(self, error: IntegrityError, user_id: int, trip_name: str):
        if trip_name and await self.name_taken(user_id, trip_name):
            logger.warning(f"Trip name conflict on write for user {user_id}: {trip_name}")
            return DuplicateNameError(f"Duplicate trip name: {trip_name}")
        logger.error(f"Trip write rejected for user {user_id}: {error.orig}")
        return BadRequestError("Could not save trip.")
