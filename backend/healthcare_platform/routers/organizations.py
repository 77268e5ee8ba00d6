"""Organization (tenant) endpoints."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import ADMINS, Principal, Role, require_roles
from healthcare_platform.core.database import commit_or_conflict, get_db
from healthcare_platform.core.exceptions import ConflictError, NotFoundError
from healthcare_platform.models.department import Department
from healthcare_platform.models.organization import Organization
from healthcare_platform.repositories.department_repository import DepartmentRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.organization import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationSearch,
    OrganizationUpdate,
)
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "organization"


@router.patch(
    "/",
    response_model=Page[OrganizationResponse],
    summary="Search organizations",
    responses={401: {"description": "Unauthorized"}, 403: {"description": "Forbidden"}},
)
async def search_organizations(
    data: OrganizationSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> dict[str, Any]:
    """Filter, sort and page organizations. Organization admins only see their own."""
    repo = OrganizationRepository(db)
    extra = [] if principal.is_system_admin else [Organization.id == principal.organization_id]
    rows, total, window = repo.search(data, extra_criteria=extra)
    return build_page(OrganizationResponse, rows, total, window)


@router.get(
    "/{organization_id}",
    response_model=OrganizationResponse,
    summary="Get organization",
    responses={404: {"description": "Organization not found"}},
)
async def get_organization(
    organization_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> Organization:
    """Get an organization by id, archived ones included."""
    if not principal.is_system_admin and organization_id != principal.organization_id:
        raise NotFoundError("Organization", organization_id)
    return OrganizationRepository(db).get_or_404(organization_id, include_deleted=True)


@router.post(
    "/",
    response_model=OrganizationResponse,
    status_code=201,
    summary="Create organization",
    responses={409: {"description": "Organization code already exists"}},
)
async def create_organization(
    data: OrganizationCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SYSTEM_ADMIN)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Organization:
    """Create a new organization."""
    repo = OrganizationRepository(db)
    if repo.code_exists(data.code):
        raise ConflictError(f"Organization with code '{data.code}' already exists")
    org = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(org, principal)
    commit_or_conflict(db, f"Organization with code '{data.code}' already exists")
    db.refresh(org)
    return org


@router.put(
    "/{organization_id}",
    response_model=OrganizationResponse,
    summary="Update organization",
    responses={404: {"description": "Organization not found"}},
)
async def update_organization(
    organization_id: UUID,
    data: OrganizationUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SYSTEM_ADMIN)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Organization:
    """Update an active organization's name or status."""
    repo = OrganizationRepository(db)
    org = repo.get_or_404(organization_id)
    before = snapshot(org)
    repo.update(org, data.model_dump(exclude_unset=True), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_update(org, before, principal)
    commit_or_conflict(db, "Organization update conflicts with an existing record")
    db.refresh(org)
    return org


@router.delete(
    "/{organization_id}",
    status_code=204,
    summary="Archive organization",
    responses={
        404: {"description": "Organization not found"},
        409: {"description": "Organization still has active departments"},
    },
)
async def delete_organization(
    organization_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SYSTEM_ADMIN)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    """Soft-delete an organization that has no active departments."""
    repo = OrganizationRepository(db)
    org = repo.get_or_404(organization_id)
    if DepartmentRepository(db).exists(Department.organization_id == organization_id):
        raise ConflictError("Organization still has active departments")
    repo.delete(organization_id, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(org, principal)
    db.commit()
