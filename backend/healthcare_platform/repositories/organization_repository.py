from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.organization import Organization, OrganizationStatus
from healthcare_platform.repositories.base import BaseRepository


class OrganizationRepository(BaseRepository[Organization]):
    model = Organization
    label = "Organization"
    filters = (
        contains("code"),
        contains("name", case_sensitive=False),
        exact("status"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "code", "name", "status")

    def code_exists(self, code: str) -> bool:
        """Codes stay reserved after archival, so deleted rows count too."""
        return self.exists(Organization.code == code, include_deleted=True)

    def get_active(self, organization_id: UUID) -> Organization:
        """Live organization in ``active`` status; archived ones are NotFound."""
        org = self.get_or_404(organization_id)
        if org.status != OrganizationStatus.ACTIVE.value:
            raise ConflictError(f"Organization {organization_id} is {org.status}")
        return org
