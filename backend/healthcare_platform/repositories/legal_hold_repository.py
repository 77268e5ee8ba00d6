from __future__ import annotations

from uuid import UUID

from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.core.filtering import contains, date_range, exact
from healthcare_platform.models.compliance_review import ComplianceReview, ComplianceReviewStatus
from healthcare_platform.models.legal_hold import LegalHold, LegalHoldStatus
from healthcare_platform.repositories.base import BaseRepository

CLOSED_REVIEW_STATUSES = (
    ComplianceReviewStatus.COMPLETED.value,
    ComplianceReviewStatus.CANCELLED.value,
)


class LegalHoldRepository(BaseRepository[LegalHold]):
    model = LegalHold
    label = "Legal hold"
    filters = (
        exact("organization_id"),
        exact("subject_type"),
        exact("subject_id"),
        exact("status"),
        exact("method"),
        contains("reason", case_sensitive=False),
        *date_range("effective_at"),
        *date_range("release_at"),
    )
    sort_fields = ("created_at", "updated_at", "effective_at", "release_at", "status")

    def count_active_reviews(self, hold_id: UUID) -> int:
        return (
            self.db.query(ComplianceReview)
            .filter(
                ComplianceReview.hold_id == hold_id,
                ComplianceReview.deleted_at.is_(None),
                ComplianceReview.status.notin_(CLOSED_REVIEW_STATUSES),
            )
            .count()
        )

    def get_active(self, organization_id: UUID, hold_id: UUID) -> LegalHold:
        """Hold that is live, in ``organization_id`` and not yet released."""
        hold = self.get_or_404(hold_id, organization_id)
        if hold.status != LegalHoldStatus.ACTIVE.value:
            raise ConflictError(f"Legal hold {hold_id} is {hold.status}")
        return hold
