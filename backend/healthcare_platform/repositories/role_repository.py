from __future__ import annotations

from healthcare_platform.core.filtering import contains, exact
from healthcare_platform.models.role import Role
from healthcare_platform.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    model = Role
    label = "Role"
    filters = (
        contains("code"),
        contains("name", case_sensitive=False),
        exact("scope_type"),
        exact("status"),
    )
    sort_fields = ("created_at", "updated_at", "code", "name", "scope_type")

    def code_exists(self, code: str) -> bool:
        return self.exists(Role.code == code)
