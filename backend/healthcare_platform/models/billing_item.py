from sqlalchemy import Column, ForeignKey, Integer, Numeric, String

from healthcare_platform.core.database import Base
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class BillingItem(TimestampMixin, Base):
    __tablename__ = "billing_items"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    billing_code_id = Column(
        UUIDType,
        ForeignKey("billing_codes.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    patient_id = Column(
        UUIDType,
        ForeignKey("patients.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    description = Column(String(500), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(12, 2), nullable=False)
