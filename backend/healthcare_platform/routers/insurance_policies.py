"""Insurance policy endpoints."""

from datetime import date
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
from healthcare_platform.core.exceptions import ConflictError, ValidationError
from healthcare_platform.models.insurance_policy import InsurancePolicy
from healthcare_platform.repositories.insurance_policy_repository import InsurancePolicyRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.repositories.patient_repository import PatientRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.insurance_policy import (
    InsurancePolicyCreate,
    InsurancePolicyResponse,
    InsurancePolicySearch,
    InsurancePolicyUpdate,
)
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "insurance_policy"
READERS = (*ADMINS, Role.RECEPTIONIST)


def _check_coverage(start: date | None, end: date | None) -> None:
    if start is None:
        raise ValidationError("coverage_start_date cannot be null")
    if end is not None and end < start:
        raise ValidationError("coverage_end_date must not be before coverage_start_date")


@router.patch("/", response_model=Page[InsurancePolicyResponse], summary="Search insurance policies")
async def search_insurance_policies(
    data: InsurancePolicySearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = InsurancePolicyRepository(db).search(data, organization_id=scope)
    return build_page(InsurancePolicyResponse, rows, total, window)


@router.get(
    "/{policy_id}",
    response_model=InsurancePolicyResponse,
    summary="Get insurance policy",
    responses={404: {"description": "Insurance policy not found"}},
)
async def get_insurance_policy(
    policy_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> InsurancePolicy:
    return InsurancePolicyRepository(db).get_or_404(
        policy_id, organization_scope(principal), include_deleted=True
    )


@router.post(
    "/",
    response_model=InsurancePolicyResponse,
    status_code=201,
    summary="Create insurance policy",
    responses={
        404: {"description": "Organization or patient not found"},
        409: {"description": "Policy number already used in this organization"},
    },
)
async def create_insurance_policy(
    data: InsurancePolicyCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> InsurancePolicy:
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)
    PatientRepository(db).get_or_404(data.patient_id)
    _check_coverage(data.coverage_start_date, data.coverage_end_date)

    repo = InsurancePolicyRepository(db)
    message = f"Policy number '{data.policy_number}' already exists in this organization"
    if repo.policy_number_exists(data.organization_id, data.policy_number):
        raise ConflictError(message)
    policy = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(policy, principal)
    commit_or_conflict(db, message)
    db.refresh(policy)
    return policy


@router.put(
    "/{policy_id}",
    response_model=InsurancePolicyResponse,
    summary="Update insurance policy",
    responses={404: {"description": "Insurance policy not found"}},
)
async def update_insurance_policy(
    policy_id: UUID,
    data: InsurancePolicyUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> InsurancePolicy:
    repo = InsurancePolicyRepository(db)
    policy = repo.get_or_404(policy_id, organization_scope(principal))
    changes = data.model_dump(exclude_unset=True)
    _check_coverage(
        changes.get("coverage_start_date", policy.coverage_start_date),
        changes.get("coverage_end_date", policy.coverage_end_date),
    )
    before = snapshot(policy)
    repo.update(policy, changes, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_update(policy, before, principal)
    db.commit()
    db.refresh(policy)
    return policy


@router.delete(
    "/{policy_id}",
    status_code=204,
    summary="Archive insurance policy",
    responses={404: {"description": "Insurance policy not found"}},
)
async def delete_insurance_policy(
    policy_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    scope = organization_scope(principal)
    repo = InsurancePolicyRepository(db)
    policy = repo.get_or_404(policy_id, scope)
    repo.delete(policy_id, scope, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(policy, principal)
    db.commit()
