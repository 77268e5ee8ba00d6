from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.department import Department
from healthcare_platform.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    model = Department
    label = "Department"
    filters = (
        exact("organization_id"),
        contains("code"),
        contains("name", case_sensitive=False),
        exact("status"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "code", "name", "status")

    def code_exists(self, organization_id: UUID, code: str) -> bool:
        return self.exists(
            Department.organization_id == organization_id,
            Department.code == code,
            include_deleted=True,
        )

    def get_active(self, organization_id: UUID, department_id: UUID) -> Department:
        department = self.get_or_404(department_id, organization_id)
        if department.status != "active":
            raise ConflictError(f"Department {department_id} is {department.status}")
        return department
