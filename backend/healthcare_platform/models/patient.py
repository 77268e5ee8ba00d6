from sqlalchemy import Column, Date, String

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class Patient(TimestampMixin, SoftDeleteMixin, Base):
    """Patient identity record. Patients are platform-wide, not tenant-owned."""

    __tablename__ = "patients"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    phone = Column(String(50), nullable=True)
