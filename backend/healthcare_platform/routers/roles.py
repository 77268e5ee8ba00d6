"""RBAC role catalogue endpoints. Roles are platform-wide."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import ADMINS, Principal, Role, require_roles
from healthcare_platform.core.database import commit_or_conflict, get_db
from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.models.role import Role as RoleModel
from healthcare_platform.repositories.role_repository import RoleRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.role import RoleCreate, RoleResponse, RoleSearch, RoleUpdate
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "role"


@router.patch("/", response_model=Page[RoleResponse], summary="Search roles")
async def search_roles(
    data: RoleSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> dict[str, Any]:
    rows, total, window = RoleRepository(db).search(data)
    return build_page(RoleResponse, rows, total, window)


@router.get(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Get role",
    responses={404: {"description": "Role not found"}},
)
async def get_role(
    role_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> RoleModel:
    return RoleRepository(db).get_or_404(role_id)


@router.post(
    "/",
    response_model=RoleResponse,
    status_code=201,
    summary="Create role",
    responses={409: {"description": "Role code already exists"}},
)
async def create_role(
    data: RoleCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SYSTEM_ADMIN)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> RoleModel:
    repo = RoleRepository(db)
    if repo.code_exists(data.code):
        raise ConflictError(f"Role with code '{data.code}' already exists")
    role = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(role, principal)
    commit_or_conflict(db, f"Role with code '{data.code}' already exists")
    db.refresh(role)
    return role


@router.put(
    "/{role_id}",
    response_model=RoleResponse,
    summary="Update role",
    responses={404: {"description": "Role not found"}},
)
async def update_role(
    role_id: UUID,
    data: RoleUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SYSTEM_ADMIN)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> RoleModel:
    repo = RoleRepository(db)
    role = repo.get_or_404(role_id)
    before = snapshot(role)
    repo.update(role, data.model_dump(exclude_unset=True), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_update(role, before, principal)
    db.commit()
    db.refresh(role)
    return role


@router.delete(
    "/{role_id}",
    status_code=204,
    summary="Delete role",
    responses={404: {"description": "Role not found"}},
)
async def delete_role(
    role_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(Role.SYSTEM_ADMIN)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    repo = RoleRepository(db)
    role = repo.get_or_404(role_id)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(role, principal, hard=True)
    repo.delete(role_id, commit=False)
    db.commit()
