"""Notification endpoints.

Notifications without an organization are platform-wide and only visible to
system admins.
"""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import (
    ADMINS,
    CLINICAL_STAFF,
    Principal,
    ensure_organization_access,
    organization_scope,
    require_roles,
)
from healthcare_platform.core.database import get_db
from healthcare_platform.models.notification import Notification
from healthcare_platform.repositories.notification_repository import NotificationRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.notification import (
    NotificationCreate,
    NotificationResponse,
    NotificationSearch,
    NotificationUpdate,
)

router = APIRouter()

READERS = (*ADMINS, *CLINICAL_STAFF)


@router.patch("/", response_model=Page[NotificationResponse], summary="Search notifications")
async def search_notifications(
    data: NotificationSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = NotificationRepository(db).search(data, organization_id=scope)
    return build_page(NotificationResponse, rows, total, window)


@router.get(
    "/{notification_id}",
    response_model=NotificationResponse,
    summary="Get notification",
    responses={404: {"description": "Notification not found"}},
)
async def get_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> Notification:
    return NotificationRepository(db).get_or_404(notification_id, organization_scope(principal))


@router.post("/", response_model=NotificationResponse, status_code=201, summary="Create notification")
async def create_notification(
    data: NotificationCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> Notification:
    ensure_organization_access(principal, data.organization_id)
    return NotificationRepository(db).create(data.model_dump())


@router.put(
    "/{notification_id}",
    response_model=NotificationResponse,
    summary="Update delivery state",
    responses={404: {"description": "Notification not found"}},
)
async def update_notification(
    notification_id: UUID,
    data: NotificationUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> Notification:
    repo = NotificationRepository(db)
    notification = repo.get_or_404(notification_id, organization_scope(principal))
    return repo.update(notification, data.model_dump(exclude_unset=True))


@router.delete(
    "/{notification_id}",
    status_code=204,
    summary="Delete notification",
    responses={404: {"description": "Notification not found"}},
)
async def delete_notification(
    notification_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> None:
    NotificationRepository(db).delete(notification_id, organization_scope(principal))
