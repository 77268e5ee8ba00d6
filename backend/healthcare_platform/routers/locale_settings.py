"""Locale setting endpoints.

A locale setting applies to an organization as a whole (``department_id`` is
null) or to one department; each scope has at most one active setting.
"""

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
from healthcare_platform.models.locale_setting import LocaleSetting
from healthcare_platform.repositories.department_repository import DepartmentRepository
from healthcare_platform.repositories.locale_setting_repository import LocaleSettingRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.locale_setting import (
    LocaleSettingCreate,
    LocaleSettingResponse,
    LocaleSettingSearch,
    LocaleSettingUpdate,
)

router = APIRouter()


@router.patch("/", response_model=Page[LocaleSettingResponse], summary="Search locale settings")
async def search_locale_settings(
    data: LocaleSettingSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = LocaleSettingRepository(db).search(data, organization_id=scope)
    return build_page(LocaleSettingResponse, rows, total, window)


@router.get(
    "/{setting_id}",
    response_model=LocaleSettingResponse,
    summary="Get locale setting",
    responses={404: {"description": "Locale setting not found"}},
)
async def get_locale_setting(
    setting_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> LocaleSetting:
    return LocaleSettingRepository(db).get_or_404(
        setting_id, organization_scope(principal), include_deleted=True
    )


@router.post(
    "/",
    response_model=LocaleSettingResponse,
    status_code=201,
    summary="Create locale setting",
    responses={409: {"description": "Scope already has an active locale setting"}},
)
async def create_locale_setting(
    data: LocaleSettingCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> LocaleSetting:
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)
    if data.department_id is not None:
        DepartmentRepository(db).get_active(data.organization_id, data.department_id)

    repo = LocaleSettingRepository(db)
    if repo.get_active_for_scope(data.organization_id, data.department_id) is not None:
        raise ConflictError("An active locale setting already exists for this scope")
    return repo.create(data.model_dump())


@router.put(
    "/{setting_id}",
    response_model=LocaleSettingResponse,
    summary="Update locale setting",
    responses={404: {"description": "Locale setting not found"}},
)
async def update_locale_setting(
    setting_id: UUID,
    data: LocaleSettingUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> LocaleSetting:
    repo = LocaleSettingRepository(db)
    setting = repo.get_or_404(setting_id, organization_scope(principal))
    return repo.update(setting, data.model_dump(exclude_unset=True))


@router.delete(
    "/{setting_id}",
    status_code=204,
    summary="Archive locale setting",
    responses={404: {"description": "Locale setting not found"}},
)
async def delete_locale_setting(
    setting_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> None:
    LocaleSettingRepository(db).delete(setting_id, organization_scope(principal))
