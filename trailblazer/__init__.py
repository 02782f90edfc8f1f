"""Trailblazer: trip planning API."""

__version__ = "1.0.0"
