from sqlalchemy import Column, ForeignKey, String, Text, UniqueConstraint

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class Department(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "departments"
    __table_args__ = (UniqueConstraint("organization_id", "code", name="uq_departments_org_code"),)

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    code = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="active")
