"""Legal hold endpoints."""

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
from healthcare_platform.models.legal_hold import LegalHold, LegalHoldStatus
from healthcare_platform.models.shared import utc_now
from healthcare_platform.repositories.legal_hold_repository import LegalHoldRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.compliance import (
    LegalHoldCreate,
    LegalHoldResponse,
    LegalHoldSearch,
    LegalHoldUpdate,
)
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "legal_hold"


@router.patch("/", response_model=Page[LegalHoldResponse], summary="Search legal holds")
async def search_legal_holds(
    data: LegalHoldSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = LegalHoldRepository(db).search(data, organization_id=scope)
    return build_page(LegalHoldResponse, rows, total, window)


@router.get(
    "/{hold_id}",
    response_model=LegalHoldResponse,
    summary="Get legal hold",
    responses={404: {"description": "Legal hold not found"}},
)
async def get_legal_hold(
    hold_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> LegalHold:
    return LegalHoldRepository(db).get_or_404(hold_id, organization_scope(principal), include_deleted=True)


@router.post(
    "/",
    response_model=LegalHoldResponse,
    status_code=201,
    summary="Place legal hold",
)
async def create_legal_hold(
    data: LegalHoldCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> LegalHold:
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)
    repo = LegalHoldRepository(db)
    hold = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(hold, principal)
    db.commit()
    db.refresh(hold)
    return hold


@router.put(
    "/{hold_id}",
    response_model=LegalHoldResponse,
    summary="Update legal hold",
    responses={404: {"description": "Legal hold not found"}},
)
async def update_legal_hold(
    hold_id: UUID,
    data: LegalHoldUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> LegalHold:
    """Update a hold. Releasing it stamps ``release_at`` unless one is given."""
    repo = LegalHoldRepository(db)
    hold = repo.get_or_404(hold_id, organization_scope(principal))
    changes = data.model_dump(exclude_unset=True)
    old_status = hold.status
    new_status = changes.get("status") or old_status
    # A released hold always carries its release time
    releasing = old_status != new_status or "release_at" in changes
    if new_status == LegalHoldStatus.RELEASED.value and releasing and changes.get("release_at") is None:
        changes["release_at"] = utc_now()

    before = snapshot(hold)
    repo.update(hold, changes, commit=False)
    audit = AuditService(audit_sink, AUDIT_RESOURCE)
    if data.model_fields_set == {"status"} and old_status != new_status:
        audit.log_status_change(hold, old_status, new_status, principal)
    else:
        audit.log_update(hold, before, principal)
    db.commit()
    db.refresh(hold)
    return hold


@router.delete(
    "/{hold_id}",
    status_code=204,
    summary="Archive legal hold",
    responses={
        404: {"description": "Legal hold not found"},
        409: {"description": "Legal hold still has open compliance reviews"},
    },
)
async def delete_legal_hold(
    hold_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    scope = organization_scope(principal)
    repo = LegalHoldRepository(db)
    hold = repo.get_or_404(hold_id, scope)
    open_reviews = repo.count_active_reviews(hold_id)
    if open_reviews:
        raise ConflictError(f"Legal hold is referenced by {open_reviews} open compliance review(s)")
    repo.delete(hold_id, scope, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(hold, principal)
    db.commit()
