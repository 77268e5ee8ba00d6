"""Pydantic schemas for AuditLog."""

from typing import Any
from uuid import UUID

from healthcare_platform.schemas.common import IsoDateTime, ResponseModel, SearchRequest, UtcDateTime


class AuditLogSearch(SearchRequest):
    user_id: UUID | None = None
    organization_id: UUID | None = None
    action_type: str | None = None
    related_entity_type: str | None = None
    related_entity_id: UUID | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class AuditLogResponse(ResponseModel):
    id: UUID
    user_id: UUID | None
    organization_id: UUID | None
    action_type: str
    related_entity_type: str
    related_entity_id: UUID | None
    event_context: dict[str, Any] | None
    created_at: IsoDateTime
