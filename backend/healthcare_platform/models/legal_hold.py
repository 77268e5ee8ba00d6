from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class LegalHoldStatus(str, Enum):
    ACTIVE = "active"
    RELEASED = "released"


class LegalHold(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "legal_holds"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    subject_type = Column(String(50), nullable=False)
    subject_id = Column(UUIDType, nullable=True)
    reason = Column(Text, nullable=False)
    method = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False, default=LegalHoldStatus.ACTIVE.value)
    effective_at = Column(DateTime(timezone=True), nullable=False)
    release_at = Column(DateTime(timezone=True), nullable=True)
