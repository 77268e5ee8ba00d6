from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.filtering import date_range, exact
from healthcare_platform.models.locale_setting import LocaleSetting
from healthcare_platform.repositories.base import BaseRepository


class LocaleSettingRepository(BaseRepository[LocaleSetting]):
    model = LocaleSetting
    label = "Locale setting"
    filters = (
        exact("organization_id"),
        exact("department_id"),
        exact("language"),
        exact("timezone"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "language", "timezone")

    def get_active_for_scope(self, organization_id: UUID, department_id: UUID | None) -> LocaleSetting | None:
        """The active setting for exactly this (organization, department) pair.

        Read-then-write: two concurrent creates can both see nothing here. The
        partial unique index ``uq_locale_settings_active_scope`` rejects the
        second insert.
        """
        query = self._query(organization_id)
        if department_id is None:
            query = query.filter(LocaleSetting.department_id.is_(None))
        else:
            query = query.filter(LocaleSetting.department_id == department_id)
        return query.first()
