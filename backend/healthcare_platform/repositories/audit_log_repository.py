"""Read side of the audit trail. Rows are written only through the audit sink."""

from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.filtering import date_range, exact
from healthcare_platform.models.audit_log import AuditLog
from healthcare_platform.repositories.base import BaseRepository


class AuditLogRepository(BaseRepository[AuditLog]):
    model = AuditLog
    label = "Audit log"
    filters = (
        exact("user_id"),
        exact("action_type"),
        exact("related_entity_type"),
        exact("related_entity_id"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "action_type", "related_entity_type")
    default_page_size = 100

    def get_by_resource(
        self,
        related_entity_type: str,
        related_entity_id: UUID,
        organization_id: UUID | None = None,
    ) -> list[AuditLog]:
        return (
            self._query(organization_id)
            .filter(
                AuditLog.related_entity_type == related_entity_type,
                AuditLog.related_entity_id == related_entity_id,
            )
            .order_by(AuditLog.created_at.desc())
            .all()
        )
