from sqlalchemy import Column, Date, ForeignKey, String, UniqueConstraint

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class InsurancePolicy(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "insurance_policies"
    __table_args__ = (
        UniqueConstraint("organization_id", "policy_number", name="uq_insurance_policies_org_number"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    patient_id = Column(
        UUIDType,
        ForeignKey("patients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    policy_number = Column(String(100), nullable=False)
    payer_name = Column(String(255), nullable=False)
    group_number = Column(String(100), nullable=True)
    coverage_start_date = Column(Date, nullable=False)
    coverage_end_date = Column(Date, nullable=True)
    plan_type = Column(String(50), nullable=False)
    policy_status = Column(String(20), nullable=False, default="active")
