"""Department endpoints."""

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
from healthcare_platform.models.department import Department
from healthcare_platform.repositories.department_repository import DepartmentRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.department import (
    DepartmentCreate,
    DepartmentResponse,
    DepartmentSearch,
    DepartmentUpdate,
)
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "department"
READERS = (*ADMINS, Role.DEPARTMENT_HEAD)


@router.patch("/", response_model=Page[DepartmentResponse], summary="Search departments")
async def search_departments(
    data: DepartmentSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = DepartmentRepository(db).search(data, organization_id=scope)
    return build_page(DepartmentResponse, rows, total, window)


@router.get(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Get department",
    responses={404: {"description": "Department not found"}},
)
async def get_department(
    department_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> Department:
    return DepartmentRepository(db).get_or_404(
        department_id, organization_scope(principal), include_deleted=True
    )


@router.post(
    "/",
    response_model=DepartmentResponse,
    status_code=201,
    summary="Create department",
    responses={
        404: {"description": "Organization not found"},
        409: {"description": "Department code already used in this organization"},
    },
)
async def create_department(
    data: DepartmentCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Department:
    """Create a department inside an active organization."""
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)

    repo = DepartmentRepository(db)
    if repo.code_exists(data.organization_id, data.code):
        raise ConflictError(f"Department code '{data.code}' already exists in this organization")
    department = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(department, principal)
    commit_or_conflict(db, f"Department code '{data.code}' already exists in this organization")
    db.refresh(department)
    return department


@router.put(
    "/{department_id}",
    response_model=DepartmentResponse,
    summary="Update department",
    responses={404: {"description": "Department not found"}},
)
async def update_department(
    department_id: UUID,
    data: DepartmentUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Department:
    repo = DepartmentRepository(db)
    department = repo.get_or_404(department_id, organization_scope(principal))
    before = snapshot(department)
    repo.update(department, data.model_dump(exclude_unset=True), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_update(department, before, principal)
    db.commit()
    db.refresh(department)
    return department


@router.delete(
    "/{department_id}",
    status_code=204,
    summary="Archive department",
    responses={404: {"description": "Department not found"}},
)
async def delete_department(
    department_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    scope = organization_scope(principal)
    repo = DepartmentRepository(db)
    department = repo.get_or_404(department_id, scope)
    repo.delete(department_id, scope, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(department, principal)
    db.commit()
