"""Async database wrapper around a SQLAlchemy engine."""

import asyncio
import logging
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import event, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from trailblazer.db.schema import metadata
from trailblazer.utils.config import Settings

logger = logging.getLogger(__name__)

# Statements are written with Postgres-style positional placeholders ($1, $2 ...)
_POSITIONAL = re.compile(r"\$(\d+)")


def bind_positional(sql: str, params: Sequence[Any]) -> tuple:
    """
    Rewrite ``$n`` placeholders as named binds for ``sqlalchemy.text``.

    Returns the statement text and the matching parameter dict. A placeholder
    may appear more than once; every ``$n`` must have a value.
    """
    values = {}
    for match in _POSITIONAL.finditer(sql):
        idx = int(match.group(1))
        if idx < 1 or idx > len(params):
            raise ValueError(f"No parameter for placeholder ${idx} ({len(params)} given)")
        values[f"p{idx}"] = params[idx - 1]
    return _POSITIONAL.sub(lambda m: f":p{m.group(1)}", sql), values


class Database:
    """
    Owns the connection pool and runs hand-written SQL.

    Each call runs in its own short transaction; there is no unit of work
    spanning several statements.
    """

    def __init__(self, url: str, pool_size: int = 5, max_overflow: int = 10, echo: bool = False):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.echo = echo
        self.engine: Optional[AsyncEngine] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.get_database_uri(),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    async def connect(self, max_wait_seconds: int = 30) -> None:
        """
        Create the engine and wait until the server accepts connections.

        Hosted Postgres can take a few seconds to come up, so ``SELECT 1`` is
        retried once a second until ``max_wait_seconds`` runs out.
        """
        if self.engine is not None:
            return

        if self.is_sqlite:
            self.engine = create_async_engine(self.url, echo=self.echo)

            @event.listens_for(self.engine.sync_engine, "connect")
            def _enable_foreign_keys(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()
        else:
            self.engine = create_async_engine(
                self.url,
                echo=self.echo,
                pool_pre_ping=True,
                pool_size=self.pool_size,
                max_overflow=self.max_overflow,
            )

        loop = asyncio.get_running_loop()
        deadline = loop.time() + max_wait_seconds
        while True:
            try:
                async with self.engine.connect() as conn:
                    await conn.execute(text("SELECT 1"))
                break
            except (DBAPIError, OSError) as e:
                if loop.time() >= deadline:
                    await self.close()
                    raise RuntimeError(
                        f"Database not ready after {max_wait_seconds}s: {e}"
                    ) from e
                logger.warning(f"Database not ready yet, retrying: {e}")
                await asyncio.sleep(1)

        logger.info(f"Database connected ({self.engine.url.render_as_string(hide_password=True)})")

    async def close(self) -> None:
        if self.engine is not None:
            await self.engine.dispose()
            self.engine = None
            logger.info("Database connection closed")

    async def create_schema(self) -> None:
        """Create any missing tables."""
        async with self._require_engine().begin() as conn:
            await conn.run_sync(metadata.create_all)

    async def drop_schema(self) -> None:
        async with self._require_engine().begin() as conn:
            await conn.run_sync(metadata.drop_all)

    async def fetch_all(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a statement and return every row as a dict."""
        if self.is_sqlite:
            # sqlite3 has no native date type; store ISO strings
            params = [p.isoformat() if isinstance(p, (date, datetime)) else p for p in params]
        statement, values = bind_positional(sql, params)
        async with self._require_engine().begin() as conn:
            result = await conn.execute(text(statement), values)
            if not result.returns_rows:
                return []
            return [dict(row._mapping) for row in result]

    async def fetch_one(self, sql: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """Run a statement and return its first row, or None."""
        rows = await self.fetch_all(sql, params)
        return rows[0] if rows else None

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database is not connected. Call connect() first.")
        return self.engine
