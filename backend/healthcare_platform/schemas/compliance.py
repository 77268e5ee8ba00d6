"""Pydantic schemas for legal holds and compliance reviews."""

from uuid import UUID

from pydantic import Field

from healthcare_platform.models.compliance_review import ComplianceReviewStatus
from healthcare_platform.models.legal_hold import LegalHoldStatus
from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
    UtcDateTime,
)


class LegalHoldCreate(CreateModel):
    organization_id: UUID
    subject_type: str = Field(..., min_length=1, max_length=50)
    subject_id: UUID | None = None
    reason: str = Field(..., min_length=1)
    method: str = Field(..., min_length=1, max_length=50)
    status: LegalHoldStatus = LegalHoldStatus.ACTIVE
    effective_at: UtcDateTime
    release_at: UtcDateTime | None = None


class LegalHoldUpdate(UpdateModel):
    reason: str | None = Field(default=None, min_length=1)
    method: str | None = Field(default=None, min_length=1, max_length=50)
    status: LegalHoldStatus | None = None
    release_at: UtcDateTime | None = None


class LegalHoldSearch(SearchRequest):
    organization_id: UUID | None = None
    subject_type: str | None = None
    subject_id: UUID | None = None
    status: LegalHoldStatus | None = None
    method: str | None = None
    reason: str | None = None
    effective_at_from: UtcDateTime | None = None
    effective_at_to: UtcDateTime | None = None
    release_at_from: UtcDateTime | None = None
    release_at_to: UtcDateTime | None = None


class LegalHoldResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    subject_type: str
    subject_id: UUID | None
    reason: str
    method: str
    status: str
    effective_at: IsoDateTime
    release_at: IsoDateTime | None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None


class ComplianceReviewCreate(CreateModel):
    organization_id: UUID
    hold_id: UUID | None = None
    reviewer_id: UUID | None = None
    review_type: str = Field(..., min_length=1, max_length=50)
    method: str = Field(..., min_length=1, max_length=100)
    status: ComplianceReviewStatus = ComplianceReviewStatus.SCHEDULED
    outcome: str | None = None
    recommendations: str | None = None
    reviewed_at: UtcDateTime | None = None
    comments: str | None = None


class ComplianceReviewUpdate(UpdateModel):
    reviewer_id: UUID | None = None
    review_type: str | None = Field(default=None, min_length=1, max_length=50)
    method: str | None = Field(default=None, min_length=1, max_length=100)
    status: ComplianceReviewStatus | None = None
    outcome: str | None = None
    recommendations: str | None = None
    reviewed_at: UtcDateTime | None = None
    comments: str | None = None


class ComplianceReviewSearch(SearchRequest):
    organization_id: UUID | None = None
    hold_id: UUID | None = None
    reviewer_id: UUID | None = None
    review_type: str | None = None
    status: ComplianceReviewStatus | None = None
    method: str | None = None
    outcome: str | None = None
    reviewed_at_from: UtcDateTime | None = None
    reviewed_at_to: UtcDateTime | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class ComplianceReviewResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    hold_id: UUID | None
    reviewer_id: UUID | None
    review_type: str
    method: str
    status: str
    outcome: str | None
    recommendations: str | None
    reviewed_at: IsoDateTime | None
    comments: str | None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
