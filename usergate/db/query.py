"""Parameterized SQL fragment builders.

Both builders skip None values so callers can pass partially-filled dicts
straight from validated request data.
"""

from typing import Any


def build_where_clause(conditions: dict[str, Any]) -> tuple[str, list[Any]]:
    """Build a WHERE clause of `column = ?` terms joined with AND.

    Args:
        conditions: Column name to value; None values are skipped

    Returns:
        Tuple of (clause, params). Clause is '1=1' when nothing applies.
    """
    fragments = []
    params = []

    for key, value in conditions.items():
        if value is None:
            continue
        fragments.append(f"{key} = ?")
        params.append(value)

    if not fragments:
        return "1=1", []

    return " AND ".join(fragments), params


def build_update_clause(
    data: dict[str, Any],
    exclude: set[str] | None = None
) -> tuple[str, list[Any]]:
    """Build the SET portion of an UPDATE statement.

    Args:
        data: Column name to new value; None values are skipped
        exclude: Column names that must never be updated

    Returns:
        Tuple of (clause, params). Clause is '' when nothing applies.
    """
    exclude = exclude or set()
    fragments = []
    params = []

    for key, value in data.items():
        if value is None or key in exclude:
            continue
        fragments.append(f"{key} = ?")
        params.append(value)

    return ", ".join(fragments), params
