"""Audit service for recording state changes to compliance-relevant entities."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol
from uuid import UUID

from fastapi import Depends
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import Principal
from healthcare_platform.core.database import get_db
from healthcare_platform.models.audit_log import AuditLog
from healthcare_platform.models.shared import ensure_utc, generate_uuid, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuditEvent:
    user_id: UUID | None
    action_type: str
    related_entity_type: str
    related_entity_id: UUID | None
    organization_id: UUID | None = None
    event_context: dict[str, Any] | None = None
    created_at: datetime = field(default_factory=utc_now)


class AuditSink(Protocol):
    def record(self, event: AuditEvent) -> None: ...


class SqlAlchemyAuditSink:
    """Adds audit rows to the caller's session.

    Nothing is committed here: the row lands in the same transaction as the
    mutation it describes, so both persist or neither does.
    """

    def __init__(self, db: Session):
        self.db = db

    def record(self, event: AuditEvent) -> None:
        self.db.add(
            AuditLog(
                id=generate_uuid(),
                user_id=event.user_id,
                organization_id=event.organization_id,
                action_type=event.action_type,
                related_entity_type=event.related_entity_type,
                related_entity_id=event.related_entity_id,
                event_context=event.event_context,
                created_at=event.created_at,
            )
        )
        self.db.flush()


class InMemoryAuditSink:
    """Collects events in a list; used to assert on emitted events in tests."""

    def __init__(self) -> None:
        self.events: list[AuditEvent] = []

    def record(self, event: AuditEvent) -> None:
        self.events.append(event)


def get_audit_sink(db: Session = Depends(get_db)) -> AuditSink:
    return SqlAlchemyAuditSink(db)


def _jsonable(value: Any) -> Any:
    if isinstance(value, UUID | Decimal):
        return str(value)
    if isinstance(value, datetime):
        return ensure_utc(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def snapshot(record: Any) -> dict[str, Any]:
    """Column values of an ORM row as a JSON-safe dict."""
    mapper = inspect(record).mapper
    return {attr.key: _jsonable(getattr(record, attr.key)) for attr in mapper.column_attrs}


def diff(old: dict[str, Any], new: dict[str, Any]) -> dict[str, Any]:
    changes: dict[str, Any] = {}
    for key in set(old) | set(new):
        if key == "updated_at":
            continue
        old_val = old.get(key)
        new_val = new.get(key)
        if old_val != new_val:
            changes[key] = {"old": old_val, "new": new_val}
    return changes


class AuditService:
    """Builds audit events for one entity type and hands them to a sink."""

    def __init__(self, sink: AuditSink, resource_type: str):
        self.sink = sink
        self.resource_type = resource_type

    def _emit(
        self,
        action: str,
        record: Any,
        principal: Principal | None,
        context: dict[str, Any] | None,
    ) -> AuditEvent:
        event = AuditEvent(
            user_id=principal.id if principal else None,
            action_type=action,
            related_entity_type=self.resource_type,
            related_entity_id=getattr(record, "id", None),
            organization_id=getattr(record, "organization_id", None),
            event_context=context,
        )
        self.sink.record(event)
        logger.debug(
            "Audit %s %s %s by %s",
            action,
            self.resource_type,
            event.related_entity_id,
            event.user_id,
        )
        return event

    def log_create(self, record: Any, principal: Principal | None = None) -> AuditEvent:
        """Log a resource creation event."""
        return self._emit("created", record, principal, {"data": snapshot(record)})

    def log_update(
        self,
        record: Any,
        old_data: dict[str, Any],
        principal: Principal | None = None,
    ) -> AuditEvent:
        """Log a resource update event with the changed fields.

        Always emits, even when the diff is empty: the write itself refreshed
        ``updated_at`` and is an auditable action.
        """
        changes = diff(old_data, snapshot(record))
        return self._emit("updated", record, principal, {"changes": changes})

    def log_status_change(
        self,
        record: Any,
        old_status: str,
        new_status: str,
        principal: Principal | None = None,
    ) -> AuditEvent:
        """Log a status change event."""
        return self._emit(
            "status_changed",
            record,
            principal,
            {"changes": {"status": {"old": old_status, "new": new_status}}},
        )

    def log_delete(self, record: Any, principal: Principal | None = None, hard: bool = False) -> AuditEvent:
        """Log an archival (soft) or physical (hard) delete."""
        return self._emit("deleted", record, principal, {"hard_delete": hard})
