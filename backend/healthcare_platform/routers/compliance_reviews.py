"""Compliance review endpoints."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import (
    ADMINS,
    Principal,
    ensure_organization_access,
    organization_scope,
    require_roles,
)
from healthcare_platform.core.database import get_db
from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.models.compliance_review import ComplianceReview, ComplianceReviewStatus
from healthcare_platform.repositories.compliance_review_repository import ComplianceReviewRepository
from healthcare_platform.repositories.legal_hold_repository import LegalHoldRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.compliance import (
    ComplianceReviewCreate,
    ComplianceReviewResponse,
    ComplianceReviewSearch,
    ComplianceReviewUpdate,
)
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "compliance_review"


def _ensure_open(review: ComplianceReview) -> None:
    if review.status == ComplianceReviewStatus.COMPLETED.value:
        raise ConflictError(f"Compliance review {review.id} is completed and can no longer change")


@router.patch("/", response_model=Page[ComplianceReviewResponse], summary="Search compliance reviews")
async def search_compliance_reviews(
    data: ComplianceReviewSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = ComplianceReviewRepository(db).search(data, organization_id=scope)
    return build_page(ComplianceReviewResponse, rows, total, window)


@router.get(
    "/{review_id}",
    response_model=ComplianceReviewResponse,
    summary="Get compliance review",
    responses={404: {"description": "Compliance review not found"}},
)
async def get_compliance_review(
    review_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> ComplianceReview:
    return ComplianceReviewRepository(db).get_or_404(
        review_id, organization_scope(principal), include_deleted=True
    )


@router.post(
    "/",
    response_model=ComplianceReviewResponse,
    status_code=201,
    summary="Schedule compliance review",
    responses={
        404: {"description": "Organization or legal hold not found"},
        409: {"description": "Legal hold is released"},
    },
)
async def create_compliance_review(
    data: ComplianceReviewCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> ComplianceReview:
    """Schedule a review, optionally attached to an active hold of the same organization."""
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)
    if data.hold_id is not None:
        LegalHoldRepository(db).get_active(data.organization_id, data.hold_id)

    repo = ComplianceReviewRepository(db)
    review = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(review, principal)
    db.commit()
    db.refresh(review)
    return review


@router.put(
    "/{review_id}",
    response_model=ComplianceReviewResponse,
    summary="Update compliance review",
    responses={
        404: {"description": "Compliance review not found"},
        409: {"description": "Compliance review is completed"},
    },
)
async def update_compliance_review(
    review_id: UUID,
    data: ComplianceReviewUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> ComplianceReview:
    repo = ComplianceReviewRepository(db)
    review = repo.get_or_404(review_id, organization_scope(principal))
    _ensure_open(review)

    changes = data.model_dump(exclude_unset=True)
    old_status = review.status
    new_status = changes.get("status") or old_status
    before = snapshot(review)
    repo.update(review, changes, commit=False)
    audit = AuditService(audit_sink, AUDIT_RESOURCE)
    if changes.keys() == {"status"} and old_status != new_status:
        audit.log_status_change(review, old_status, new_status, principal)
    else:
        audit.log_update(review, before, principal)
    db.commit()
    db.refresh(review)
    return review


@router.delete(
    "/{review_id}",
    status_code=204,
    summary="Archive compliance review",
    responses={
        404: {"description": "Compliance review not found"},
        409: {"description": "Compliance review is completed"},
    },
)
async def delete_compliance_review(
    review_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    scope = organization_scope(principal)
    repo = ComplianceReviewRepository(db)
    review = repo.get_or_404(review_id, scope)
    _ensure_open(review)
    repo.delete(review_id, scope, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(review, principal)
    db.commit()
