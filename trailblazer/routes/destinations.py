"""
Destination routes: live country lookups and the per-trip snapshots.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from trailblazer.models import DestinationStore, TripStore
from trailblazer.routes.deps import (
    authenticate_jwt,
    ensure_logged_in,
    get_countries_client,
    get_destination_store,
    get_trip_store,
)
from trailblazer.services.trip_planner import destination_view
from trailblazer.tools import CountriesClient
from trailblazer.utils.exceptions import TrailblazerError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/destinations", tags=["destinations"])


@router.get("/country/{country_name}")
async def get_country_details(
    country_name: str,
    _: Optional[Dict[str, Any]] = Depends(authenticate_jwt),
    countries: CountriesClient = Depends(get_countries_client),
):
    """Current facts for a country, straight from the upstream service"""
    return {"destination": await countries.lookup(country_name)}


@router.get("/suggestions/{query}")
async def get_country_suggestions(
    query: str,
    _: Optional[Dict[str, Any]] = Depends(authenticate_jwt),
    countries: CountriesClient = Depends(get_countries_client),
):
    """Country names for autocomplete; empty when the lookup fails"""
    try:
        suggestions = await countries.search_countries(query)
    except TrailblazerError as e:
        logger.warning(f"Country suggestions failed for {query!r}: {e.message}")
        suggestions = []
    return {"suggestions": suggestions}


@router.get("/details/{destination_id}")
async def get_destination(
    destination_id: int,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    destinations: DestinationStore = Depends(get_destination_store),
    trips: TripStore = Depends(get_trip_store),
):
    destination = await destinations.get(destination_id)
    # only visible to the owner of the trip
    await trips.get(destination["trip_id"], user["user_id"])
    return {"destination": destination_view(destination)}


@router.get("/{trip_id}")
async def get_trip_destination(
    trip_id: int,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    destinations: DestinationStore = Depends(get_destination_store),
    trips: TripStore = Depends(get_trip_store),
):
    """The snapshot taken when the trip was created"""
    await trips.get(trip_id, user["user_id"])
    return {"destination": destination_view(await destinations.get_for_trip(trip_id))}
