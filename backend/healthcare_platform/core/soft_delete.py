"""Soft-delete column and helpers shared by archival entities.

A row is *active* while ``deleted_at`` is NULL. Deleting sets it once; there is
no undelete. Entities without the column are removed physically instead.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import Query


class SoftDeleteMixin:
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def supports_soft_delete(model: type[Any]) -> bool:
    return hasattr(model, "deleted_at")


def filter_active(
    query: Query,  # type: ignore[type-arg]
    model: type[Any],
) -> Query:  # type: ignore[type-arg]
    """Restrict ``query`` to active rows; a no-op for hard-delete entities."""
    if not supports_soft_delete(model):
        return query
    return query.filter(model.deleted_at.is_(None))
