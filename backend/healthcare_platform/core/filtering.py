"""Declarative search filters.

Repositories describe which request attributes map to which columns, and how:

    FILTERS = (
        exact("status"),
        contains("name", case_sensitive=False),
        *date_range("created_at"),
    )

``build_predicate`` turns those declarations plus a request object into a list
of SQLAlchemy criteria. Attributes that are absent or ``None`` add nothing.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from sqlalchemy.sql.elements import ColumnElement


class FilterOp(str, Enum):
    EQ = "eq"
    CONTAINS = "contains"
    ICONTAINS = "icontains"
    GTE = "gte"
    LTE = "lte"


@dataclass(frozen=True)
class FieldFilter:
    param: str
    column: str
    op: FilterOp = FilterOp.EQ

    def criterion(self, model: type[Any], value: Any) -> ColumnElement[bool]:
        column = getattr(model, self.column)
        if self.op is FilterOp.CONTAINS:
            return column.contains(value, autoescape=True)
        if self.op is FilterOp.ICONTAINS:
            return column.icontains(value, autoescape=True)
        if self.op is FilterOp.GTE:
            return column >= value
        if self.op is FilterOp.LTE:
            return column <= value
        return column == value


def exact(column: str, param: str | None = None) -> FieldFilter:
    return FieldFilter(param or column, column, FilterOp.EQ)


def contains(column: str, param: str | None = None, case_sensitive: bool = True) -> FieldFilter:
    op = FilterOp.CONTAINS if case_sensitive else FilterOp.ICONTAINS
    return FieldFilter(param or column, column, op)


def date_range(
    column: str,
    from_param: str | None = None,
    to_param: str | None = None,
) -> tuple[FieldFilter, FieldFilter]:
    """Inclusive ``<column>_from`` / ``<column>_to`` bounds, each optional."""
    return (
        FieldFilter(from_param or f"{column}_from", column, FilterOp.GTE),
        FieldFilter(to_param or f"{column}_to", column, FilterOp.LTE),
    )


def value_range(
    column: str,
    min_param: str | None = None,
    max_param: str | None = None,
) -> tuple[FieldFilter, FieldFilter]:
    """Inclusive ``<column>_min`` / ``<column>_max`` bounds, each optional."""
    return (
        FieldFilter(min_param or f"{column}_min", column, FilterOp.GTE),
        FieldFilter(max_param or f"{column}_max", column, FilterOp.LTE),
    )


def _read(request: Any, name: str) -> Any:
    if isinstance(request, Mapping):
        return request.get(name)
    return getattr(request, name, None)


def build_predicate(
    model: type[Any],
    filters: Iterable[FieldFilter],
    request: Any,
) -> list[ColumnElement[bool]]:
    """Build the criteria for every filter whose request attribute is set."""
    criteria: list[ColumnElement[bool]] = []
    for field_filter in filters:
        value = _read(request, field_filter.param)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        criteria.append(field_filter.criterion(model, value))
    return criteria
