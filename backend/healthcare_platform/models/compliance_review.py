from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class ComplianceReviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ComplianceReview(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "compliance_reviews"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    hold_id = Column(
        UUIDType,
        ForeignKey("legal_holds.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    reviewer_id = Column(UUIDType, nullable=True)
    review_type = Column(String(50), nullable=False)
    method = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False, default=ComplianceReviewStatus.SCHEDULED.value)
    outcome = Column(Text, nullable=True)
    recommendations = Column(Text, nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    comments = Column(Text, nullable=True)
