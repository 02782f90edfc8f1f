"""Shared plumbing for the table accessors."""

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from trailblazer.db import Database
from trailblazer.utils.exceptions import NotFoundError
from trailblazer.utils.sql import placeholder, sql_for_partial_update


class Store:
    """
    Base class for per-table accessors.

    Subclasses set ``table``, ``key`` (primary key column), ``columns`` (the
    projection every query returns) and optionally ``updatable`` (field ->
    column map for partial updates) and ``label`` (used in not-found
    messages).
    """

    table: str = ""
    key: str = "id"
    columns: Sequence[str] = ()
    updatable: Mapping[str, str] = {}
    label: str = "record"

    def __init__(self, db: Database):
        self.db = db

    @property
    def projection(self) -> str:
        return ", ".join(self.columns)

    def not_found(self, key_value: Any) -> NotFoundError:
        return NotFoundError(f"No {self.label} found with ID: {key_value}")

    async def get(self, key_value: Any) -> Dict[str, Any]:
        row = await self.db.fetch_one(
            f"SELECT {self.projection} FROM {self.table} WHERE {self.key} = $1",
            [key_value],
        )
        if row is None:
            raise self.not_found(key_value)
        return row

    async def update(
        self,
        key_value: Any,
        data: Mapping[str, Any],
        owner: Optional[Tuple[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Write the fields in ``data`` to the row keyed by ``key_value``.

        Args:
            key_value: Primary key of the row
            data: Sparse mapping of fields to new values
            owner: Optional (column, value) pair the row must also match

        Raises:
            InvalidInputError: If ``data`` is empty
            NotFoundError: If no row matched
        """
        set_cols, values = sql_for_partial_update(data, self.updatable)
        where = f"{self.key} = {placeholder(values)}"
        params: List[Any] = [*values, key_value]
        if owner is not None:
            owner_col, owner_value = owner
            where += f" AND {owner_col} = {placeholder(params)}"
            params.append(owner_value)

        row = await self.db.fetch_one(
            f"UPDATE {self.table} SET {set_cols} WHERE {where} RETURNING {self.projection}",
            params,
        )
        if row is None:
            raise self.not_found(key_value)
        return row

    async def remove(self, key_value: Any, owner: Optional[Tuple[str, Any]] = None) -> None:
        where = f"{self.key} = $1"
        params: List[Any] = [key_value]
        if owner is not None:
            where += f" AND {owner[0]} = $2"
            params.append(owner[1])

        row = await self.db.fetch_one(
            f"DELETE FROM {self.table} WHERE {where} RETURNING {self.key}",
            params,
        )
        if row is None:
            raise self.not_found(key_value)
