"""Billing code catalogue endpoints. Codes are hard-deleted."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import (
    ADMINS,
    Principal,
    Role,
    ensure_organization_access,
    organization_scope,
    require_roles,
)
from healthcare_platform.core.database import commit_or_conflict, get_db
from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.models.billing_code import BillingCode
from healthcare_platform.repositories.billing_code_repository import BillingCodeRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.billing import (
    BillingCodeCreate,
    BillingCodeResponse,
    BillingCodeSearch,
    BillingCodeUpdate,
)
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "billing_code"
READERS = (*ADMINS, Role.RECEPTIONIST)


def _duplicate(code_system: str, code: str) -> str:
    return f"Billing code {code_system}/{code} already exists in this organization"


@router.patch("/", response_model=Page[BillingCodeResponse], summary="Search billing codes")
async def search_billing_codes(
    data: BillingCodeSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = BillingCodeRepository(db).search(data, organization_id=scope)
    return build_page(BillingCodeResponse, rows, total, window)


@router.get(
    "/{billing_code_id}",
    response_model=BillingCodeResponse,
    summary="Get billing code",
    responses={404: {"description": "Billing code not found"}},
)
async def get_billing_code(
    billing_code_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> BillingCode:
    return BillingCodeRepository(db).get_or_404(billing_code_id, organization_scope(principal))


@router.post(
    "/",
    response_model=BillingCodeResponse,
    status_code=201,
    summary="Create billing code",
    responses={409: {"description": "Code already exists in this code system"}},
)
async def create_billing_code(
    data: BillingCodeCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> BillingCode:
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)

    repo = BillingCodeRepository(db)
    if repo.code_exists(data.organization_id, data.code_system, data.code):
        raise ConflictError(_duplicate(data.code_system, data.code))
    billing_code = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(billing_code, principal)
    commit_or_conflict(db, _duplicate(data.code_system, data.code))
    db.refresh(billing_code)
    return billing_code


@router.put(
    "/{billing_code_id}",
    response_model=BillingCodeResponse,
    summary="Update billing code",
    responses={
        404: {"description": "Billing code not found"},
        409: {"description": "Code already exists in this code system"},
    },
)
async def update_billing_code(
    billing_code_id: UUID,
    data: BillingCodeUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> BillingCode:
    repo = BillingCodeRepository(db)
    billing_code = repo.get_or_404(billing_code_id, organization_scope(principal))
    changes = data.model_dump(exclude_unset=True)
    code_system = changes.get("code_system") or billing_code.code_system
    code = changes.get("code") or billing_code.code
    if {"code", "code_system"} & changes.keys() and repo.code_exists(
        billing_code.organization_id, code_system, code, exclude_id=billing_code.id
    ):
        raise ConflictError(_duplicate(code_system, code))

    before = snapshot(billing_code)
    repo.update(billing_code, changes, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_update(billing_code, before, principal)
    commit_or_conflict(db, _duplicate(code_system, code))
    db.refresh(billing_code)
    return billing_code


@router.delete(
    "/{billing_code_id}",
    status_code=204,
    summary="Delete billing code",
    responses={
        404: {"description": "Billing code not found"},
        409: {"description": "Billing code is still referenced by billing items"},
    },
)
async def delete_billing_code(
    billing_code_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    """Physically delete a billing code nothing references any more."""
    scope = organization_scope(principal)
    repo = BillingCodeRepository(db)
    billing_code = repo.get_or_404(billing_code_id, scope)
    in_use = repo.count_items(billing_code_id)
    if in_use:
        raise ConflictError(f"Billing code is referenced by {in_use} billing item(s)")
    audit = AuditService(audit_sink, AUDIT_RESOURCE)
    # Event is built before the row disappears from the session
    audit.log_delete(billing_code, principal, hard=True)
    repo.delete(billing_code_id, scope, commit=False)
    db.commit()
