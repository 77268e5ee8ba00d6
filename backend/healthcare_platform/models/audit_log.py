"""AuditLog model: append-only trail of who changed which entity and when."""


from sqlalchemy import JSON, Column, DateTime, String

from healthcare_platform.core.database import Base
from healthcare_platform.models.shared import UUIDType, generate_uuid, utc_now


class AuditLog(Base):
    """Audit row. Never updated or deleted."""

    __tablename__ = "audit_logs"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    user_id = Column(UUIDType, nullable=True, index=True)
    organization_id = Column(UUIDType, nullable=True, index=True)
    action_type = Column(String(50), nullable=False, index=True)
    related_entity_type = Column(String(50), nullable=False, index=True)
    related_entity_id = Column(UUIDType, nullable=True, index=True)
    event_context = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
