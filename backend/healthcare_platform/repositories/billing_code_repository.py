from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.billing_code import BillingCode
from healthcare_platform.models.billing_item import BillingItem
from healthcare_platform.repositories.base import BaseRepository


class BillingCodeRepository(BaseRepository[BillingCode]):
    model = BillingCode
    label = "Billing code"
    filters = (
        exact("organization_id"),
        contains("code"),
        exact("code_system"),
        contains("name", case_sensitive=False),
        exact("active"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "code", "code_system", "name")

    def code_exists(
        self,
        organization_id: UUID,
        code_system: str,
        code: str,
        exclude_id: UUID | None = None,
    ) -> bool:
        criteria = [
            BillingCode.organization_id == organization_id,
            BillingCode.code_system == code_system,
            BillingCode.code == code,
        ]
        if exclude_id is not None:
            criteria.append(BillingCode.id != exclude_id)
        return self.exists(*criteria)

    def count_items(self, billing_code_id: UUID) -> int:
        return (
            self.db.query(BillingItem)
            .filter(BillingItem.billing_code_id == billing_code_id)
            .count()
        )
