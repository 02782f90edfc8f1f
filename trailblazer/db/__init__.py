"""Relational storage: connection wrapper and table definitions."""

from .database import Database, bind_positional
from .schema import metadata

__all__ = ["Database", "bind_positional", "metadata"]
