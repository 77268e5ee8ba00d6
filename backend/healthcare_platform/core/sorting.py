"""Shared sorting utilities for repository queries."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

DIRECTIONS = ("asc", "desc")


def resolve_sort(
    sort: str | None,
    order: str | None,
    allowed_fields: Sequence[str],
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> tuple[str, str]:
    """Resolve a requested sort into a whitelisted ``(field, direction)`` pair.

    Args:
        sort: Requested sort. Accepts "field", "field:asc", "field asc",
            "-field" (descending) and "+field" (ascending).
        order: Explicit direction; overrides any direction carried by ``sort``.
        allowed_fields: Columns callers may sort on.
        default_field: Column used when ``sort`` is absent or not allowed.
        default_direction: Direction used unless one is explicitly requested.

    Returns:
        The field and direction to order by.
    """
    field = default_field
    direction = default_direction
    requested_direction: str | None = None

    if sort and sort.strip():
        candidate = sort.strip()
        if candidate[0] in "+-":
            requested_direction = "asc" if candidate[0] == "+" else "desc"
            candidate = candidate[1:]
        else:
            parts = candidate.replace(":", " ").split()
            candidate = parts[0]
            if len(parts) > 1:
                requested_direction = parts[1].lower()

        # Unknown fields fall back to the default column; the direction still applies
        if candidate in allowed_fields:
            field = candidate

    if order:
        requested_direction = order.lower()
    if requested_direction in DIRECTIONS:
        direction = requested_direction
    return field, direction


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Any],
    sort: str | None,
    allowed_fields: Sequence[str],
    order: str | None = None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Apply whitelisted ordering to a SQLAlchemy query.

    ``id`` is always appended as a tiebreaker so offset pages do not overlap
    when the sort column has duplicates.
    """
    field, direction = resolve_sort(sort, order, allowed_fields, default_field, default_direction)
    column = getattr(model, field)
    order_func = asc if direction == "asc" else desc
    return query.order_by(order_func(column), asc(model.id))
