from __future__ import annotations

from datetime import datetime
from uuid import UUID

from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.appointment import Appointment, AppointmentStatus
from healthcare_platform.repositories.base import BaseRepository


class AppointmentRepository(BaseRepository[Appointment]):
    model = Appointment
    label = "Appointment"
    filters = (
        exact("organization_id"),
        exact("department_id"),
        exact("provider_id"),
        exact("patient_id"),
        exact("status"),
        exact("appointment_type"),
        contains("title", case_sensitive=False),
        *date_range("start_time"),
        *date_range("end_time"),
    )
    sort_fields = ("created_at", "updated_at", "start_time", "end_time", "status", "appointment_type")
    default_sort = "start_time"

    def find_overlap(
        self,
        start_time: datetime,
        end_time: datetime,
        *,
        provider_id: UUID | None = None,
        patient_id: UUID | None = None,
        exclude_id: UUID | None = None,
    ) -> Appointment | None:
        """First live appointment for the provider or patient overlapping ``[start, end)``.

        Cancelled appointments never block a slot.
        """
        query = self._query().filter(
            Appointment.start_time < end_time,
            Appointment.end_time > start_time,
            Appointment.status != AppointmentStatus.CANCELLED.value,
        )
        if provider_id is not None:
            query = query.filter(Appointment.provider_id == provider_id)
        if patient_id is not None:
            query = query.filter(Appointment.patient_id == patient_id)
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return query.first()
