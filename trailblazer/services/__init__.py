"""Workflows that span several tables and external services."""

from .trip_planner import TripPlanner, validate_trip_input

__all__ = ["TripPlanner", "validate_trip_input"]
