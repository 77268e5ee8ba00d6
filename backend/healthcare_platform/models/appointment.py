from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, String, Text

from healthcare_platform.core.database import Base
from healthcare_platform.core.soft_delete import SoftDeleteMixin
from healthcare_platform.models.shared import TimestampMixin, UUIDType, generate_uuid


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class Appointment(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "appointments"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    organization_id = Column(
        UUIDType,
        ForeignKey("organizations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    department_id = Column(
        UUIDType,
        ForeignKey("departments.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )
    provider_id = Column(UUIDType, nullable=False, index=True)
    patient_id = Column(
        UUIDType,
        ForeignKey("patients.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    status = Column(String(20), nullable=False, default=AppointmentStatus.SCHEDULED.value)
    appointment_type = Column(String(50), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    title = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
