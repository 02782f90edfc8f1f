"""Helpers for building SQL statements."""

from typing import Any, List, Mapping, Optional, Tuple

from .exceptions import InvalidInputError


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    field_to_column: Optional[Mapping[str, str]] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a selective UPDATE statement.

    Args:
        data_to_update: Fields to change and their new values. Only the keys
            present are written.
        field_to_column: Field name -> column name. Fields without an entry
            use their own name as the column.

    Returns:
        (set_cols, values) where set_cols looks like ``"first_name"=$1, "email"=$2``
        and values lines up with the placeholders. Callers put their WHERE
        parameters after these, starting at ``$len(values) + 1``.

    Raises:
        InvalidInputError: If there is nothing to update.

    Example:
        >>> sql_for_partial_update({"firstName": "Jon", "age": 32}, {"firstName": "first_name"})
        ('"first_name"=$1, "age"=$2', ['Jon', 32])
    """
    if not data_to_update:
        raise InvalidInputError("No data provided for update")

    field_to_column = field_to_column or {}
    set_cols: List[str] = []
    values: List[Any] = []
    for idx, (field, value) in enumerate(data_to_update.items(), start=1):
        column = field_to_column.get(field) or field
        set_cols.append(f'"{column}"=${idx}')
        values.append(value)

    return ", ".join(set_cols), values


def placeholder(values: List[Any], offset: int = 1) -> str:
    """Placeholder for the parameter that follows ``values``."""
    return f"${len(values) + offset}"
