from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.filtering import contains, date_range
from healthcare_platform.models.patient import Patient
from healthcare_platform.repositories.base import BaseRepository


class PatientRepository(BaseRepository[Patient]):
    model = Patient
    label = "Patient"
    filters = (
        contains("email", case_sensitive=False),
        contains("full_name", case_sensitive=False),
        contains("phone"),
        *date_range("date_of_birth"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "full_name", "email", "date_of_birth")

    def email_exists(self, email: str, exclude_id: UUID | None = None) -> bool:
        criteria = [Patient.email == email]
        if exclude_id is not None:
            criteria.append(Patient.id != exclude_id)
        return self.exists(*criteria, include_deleted=True)
