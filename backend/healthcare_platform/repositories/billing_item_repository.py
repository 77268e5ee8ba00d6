from __future__ import annotations

from healthcare_platform.core.filtering import contains, date_range, exact, value_range
from healthcare_platform.models.billing_item import BillingItem
from healthcare_platform.repositories.base import BaseRepository


class BillingItemRepository(BaseRepository[BillingItem]):
    model = BillingItem
    label = "Billing item"
    filters = (
        exact("organization_id"),
        exact("billing_code_id"),
        exact("patient_id"),
        contains("description", case_sensitive=False),
        *value_range("quantity"),
        *value_range("unit_price"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "quantity", "unit_price")
