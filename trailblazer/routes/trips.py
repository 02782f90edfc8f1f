"""
API routes for trip creation and management
"""
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from trailblazer.models import TripStore
from trailblazer.routes.deps import ensure_logged_in, get_trip_planner, get_trip_store
from trailblazer.schemas import (
    MessageResponse,
    TripCreateRequest,
    TripDetails,
    TripList,
    TripUpdateRequest,
    UpdatedTrip,
)
from trailblazer.services import TripPlanner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


@router.get("", response_model=TripList)
async def list_trips(
    user: Dict[str, Any] = Depends(ensure_logged_in),
    trips: TripStore = Depends(get_trip_store),
):
    """All trips of the logged-in user, earliest first"""
    return {"trips": await trips.get_all_for(user["user_id"])}


@router.post("", response_model=TripDetails, status_code=status.HTTP_201_CREATED)
async def create_trip(
    request: TripCreateRequest,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    planner: TripPlanner = Depends(get_trip_planner),
):
    """
    Create a trip and fetch its destination facts, weather and itinerary.

    Enrichment failures do not fail the request; the affected part holds a
    placeholder instead.
    """
    logger.info(f"Creating trip {request.trip_name!r} for user {user['username']}")
    return await planner.create(user["user_id"], request.model_dump())


@router.get("/{trip_id}", response_model=TripDetails)
async def get_trip(
    trip_id: int,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    planner: TripPlanner = Depends(get_trip_planner),
):
    return await planner.get(trip_id, user["user_id"])


@router.patch("/{trip_id}", response_model=UpdatedTrip)
async def update_trip(
    trip_id: int,
    request: TripUpdateRequest,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    trips: TripStore = Depends(get_trip_store),
):
    """Change only the fields sent in the body"""
    data = request.model_dump(exclude_unset=True, exclude_none=True)
    updated = await trips.update(trip_id, user["user_id"], data)
    return {"updatedTrip": updated}


@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip(
    trip_id: int,
    user: Dict[str, Any] = Depends(ensure_logged_in),
    trips: TripStore = Depends(get_trip_store),
):
    await trips.remove(trip_id, user["user_id"])
    logger.info(f"Deleted trip {trip_id} for user {user['username']}")
    return {"message": "Trip deleted"}
