from __future__ import annotations

from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.compliance_review import ComplianceReview
from healthcare_platform.repositories.base import BaseRepository


class ComplianceReviewRepository(BaseRepository[ComplianceReview]):
    model = ComplianceReview
    label = "Compliance review"
    filters = (
        exact("organization_id"),
        exact("hold_id"),
        exact("reviewer_id"),
        exact("review_type"),
        exact("status"),
        contains("method", case_sensitive=False),
        contains("outcome", case_sensitive=False),
        *date_range("reviewed_at"),
        *date_range("created_at"),
    )
    sort_fields = ("created_at", "updated_at", "reviewed_at", "status", "review_type")
