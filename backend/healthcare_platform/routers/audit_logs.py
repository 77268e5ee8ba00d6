"""Read-only audit trail endpoints."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import ADMINS, Principal, organization_scope, require_roles
from healthcare_platform.core.database import get_db
from healthcare_platform.models.audit_log import AuditLog
from healthcare_platform.repositories.audit_log_repository import AuditLogRepository
from healthcare_platform.schemas.audit_log import AuditLogResponse, AuditLogSearch
from healthcare_platform.schemas.common import Page, build_page

router = APIRouter()


@router.patch("/", response_model=Page[AuditLogResponse], summary="Search audit logs")
async def search_audit_logs(
    data: AuditLogSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> dict[str, Any]:
    """Search audit logs, newest first by default."""
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = AuditLogRepository(db).search(data, organization_id=scope)
    return build_page(AuditLogResponse, rows, total, window)


@router.get(
    "/{audit_log_id}",
    response_model=AuditLogResponse,
    summary="Get audit log entry",
    responses={404: {"description": "Audit log not found"}},
)
async def get_audit_log(
    audit_log_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> AuditLog:
    return AuditLogRepository(db).get_or_404(audit_log_id, organization_scope(principal))


@router.get(
    "/{resource_type}/{resource_id}",
    response_model=list[AuditLogResponse],
    summary="Get resource audit trail",
)
async def get_resource_audit_trail(
    resource_type: str,
    resource_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> list[AuditLog]:
    """Every audit entry for one resource, newest first."""
    return AuditLogRepository(db).get_by_resource(
        resource_type, resource_id, organization_id=organization_scope(principal)
    )
