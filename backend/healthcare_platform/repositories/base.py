"""Repository base shared by every entity.

Subclasses declare the model, the search filters, the sortable columns and a
label used in error messages; the base supplies lookup, search, create, update
and delete with the soft-delete rules applied consistently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from healthcare_platform.core.exceptions import ConflictError, NotFoundError, ValidationError
from healthcare_platform.core.filtering import FieldFilter, build_predicate
from healthcare_platform.core.pagination import PageWindow, resolve_window
from healthcare_platform.core.soft_delete import filter_active, supports_soft_delete
from healthcare_platform.core.sorting import apply_order_by
from healthcare_platform.models.shared import utc_now
from healthcare_platform.schemas.common import SearchRequest

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    model: ClassVar[type[Any]]
    label: ClassVar[str] = "Record"
    filters: ClassVar[tuple[FieldFilter, ...]] = ()
    sort_fields: ClassVar[tuple[str, ...]] = ("created_at", "updated_at")
    default_sort: ClassVar[str] = "created_at"
    default_page_size: ClassVar[int | None] = None

    def __init__(self, db: Session):
        self.db = db

    @property
    def soft_delete(self) -> bool:
        return supports_soft_delete(self.model)

    def _query(
        self,
        organization_id: UUID | None = None,
        include_deleted: bool = False,
    ) -> Query:  # type: ignore[type-arg]
        query = self.db.query(self.model)
        if not include_deleted:
            query = filter_active(query, self.model)
        if organization_id is not None:
            query = query.filter(self.model.organization_id == organization_id)
        return query

    def get_by_id(
        self,
        record_id: UUID,
        organization_id: UUID | None = None,
        include_deleted: bool = False,
    ) -> ModelT | None:
        return (
            self._query(organization_id, include_deleted)
            .filter(self.model.id == record_id)
            .first()
        )

    def get_or_404(
        self,
        record_id: UUID,
        organization_id: UUID | None = None,
        include_deleted: bool = False,
    ) -> ModelT:
        record = self.get_by_id(record_id, organization_id, include_deleted)
        if record is None:
            raise NotFoundError(self.label, record_id)
        return record

    def exists(self, *criteria: Any, include_deleted: bool = False) -> bool:
        return self._query(include_deleted=include_deleted).filter(*criteria).first() is not None

    def search(
        self,
        request: SearchRequest,
        organization_id: UUID | None = None,
        extra_criteria: Iterable[Any] = (),
    ) -> tuple[list[ModelT], int, PageWindow]:
        """Run one search request.

        The count and the page fetch are built from the same predicate.
        """
        window = resolve_window(request.page, request.limit, self.default_page_size)
        query = self._query(organization_id, include_deleted=request.include_deleted)
        criteria = [*build_predicate(self.model, self.filters, request), *extra_criteria]
        if criteria:
            query = query.filter(*criteria)

        total = query.order_by(None).count()
        ordered = apply_order_by(
            query,
            self.model,
            request.sort,
            self.sort_fields,
            order=request.order,
            default_field=self.default_sort,
        )
        rows = ordered.offset(window.skip).limit(window.limit).all()
        return rows, total, window

    def _flush(self) -> None:
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning("%s write rejected by constraint: %s", self.label, exc.orig)
            raise ConflictError(f"{self.label} conflicts with an existing record") from exc

    def _finish(self, record: ModelT | None, commit: bool) -> None:
        if commit:
            self.db.commit()
            if record is not None:
                self.db.refresh(record)

    def create(self, data: dict[str, Any], commit: bool = True) -> ModelT:
        record = self.model(**data)
        self.db.add(record)
        self._flush()
        self._finish(record, commit)
        return record

    def _reject_required_nulls(self, data: dict[str, Any]) -> None:
        """An explicit ``null`` may only clear a nullable column."""
        columns = self.model.__table__.columns
        cleared = sorted(
            key for key, value in data.items() if value is None and key in columns and not columns[key].nullable
        )
        if cleared:
            raise ValidationError(f"{self.label} field(s) cannot be null: {', '.join(cleared)}", fields=cleared)

    def update(self, record: ModelT, data: dict[str, Any], commit: bool = True) -> ModelT:
        if getattr(record, "deleted_at", None) is not None:
            raise NotFoundError(self.label, getattr(record, "id", None))
        self._reject_required_nulls(data)
        for key, value in data.items():
            setattr(record, key, value)
        # Touch the row even when nothing else changed
        record.updated_at = utc_now()  # type: ignore[attr-defined]
        self._flush()
        self._finish(record, commit)
        return record

    def delete(self, record_id: UUID, organization_id: UUID | None = None, commit: bool = True) -> None:
        """Soft- or hard-delete one row.

        The write is conditional on the row still being active, so of two
        racing deletes exactly one succeeds and the other gets NotFound.
        """
        query = self._query(organization_id).filter(self.model.id == record_id)
        if self.soft_delete:
            now = utc_now()
            affected = query.update(
                {self.model.deleted_at: now, self.model.updated_at: now},
                synchronize_session="fetch",
            )
        else:
            affected = query.delete(synchronize_session="fetch")
        if affected != 1:
            raise NotFoundError(self.label, record_id)
        self._finish(None, commit)
