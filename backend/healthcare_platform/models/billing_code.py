from sqlalchemy import Boolean, Column, ForeignKey, String, Text, UniqueConstraint

from healthcare_platform.core.database import Base
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class BillingCode(TimestampMixin, Base):
    """Billing catalogue entry (CPT, ICD-10, ...). Hard delete only."""

    __tablename__ = "billing_codes"
    __table_args__ = (
        UniqueConstraint("organization_id", "code_system", "code", name="uq_billing_codes_org_system_code"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    code = Column(String(50), nullable=False, index=True)
    code_system = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
