from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.insurance_policy import InsurancePolicy
from healthcare_platform.repositories.base import BaseRepository


class InsurancePolicyRepository(BaseRepository[InsurancePolicy]):
    model = InsurancePolicy
    label = "Insurance policy"
    filters = (
        exact("organization_id"),
        exact("patient_id"),
        exact("policy_status"),
        exact("plan_type"),
        contains("policy_number"),
        contains("payer_name", case_sensitive=False),
        *date_range("coverage_start_date", "coverage_start_from", "coverage_start_to"),
        *date_range("coverage_end_date", "coverage_end_from", "coverage_end_to"),
    )
    sort_fields = (
        "created_at",
        "policy_number",
        "plan_type",
        "payer_name",
        "policy_status",
        "coverage_start_date",
        "coverage_end_date",
    )

    def policy_number_exists(self, organization_id: UUID, policy_number: str) -> bool:
        return self.exists(
            InsurancePolicy.organization_id == organization_id,
            InsurancePolicy.policy_number == policy_number,
            include_deleted=True,
        )
