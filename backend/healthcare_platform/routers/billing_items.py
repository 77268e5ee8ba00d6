"""Billing item endpoints. Items are hard-deleted and not audited."""

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
from healthcare_platform.core.database import get_db
from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.models.billing_item import BillingItem
from healthcare_platform.repositories.billing_code_repository import BillingCodeRepository
from healthcare_platform.repositories.billing_item_repository import BillingItemRepository
from healthcare_platform.repositories.patient_repository import PatientRepository
from healthcare_platform.schemas.billing import (
    BillingItemCreate,
    BillingItemResponse,
    BillingItemSearch,
    BillingItemUpdate,
)
from healthcare_platform.schemas.common import Page, build_page

router = APIRouter()

ROLES = (*ADMINS, Role.RECEPTIONIST)


@router.patch("/", response_model=Page[BillingItemResponse], summary="Search billing items")
async def search_billing_items(
    data: BillingItemSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ROLES)),
) -> dict[str, Any]:
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = BillingItemRepository(db).search(data, organization_id=scope)
    return build_page(BillingItemResponse, rows, total, window)


@router.get(
    "/{billing_item_id}",
    response_model=BillingItemResponse,
    summary="Get billing item",
    responses={404: {"description": "Billing item not found"}},
)
async def get_billing_item(
    billing_item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ROLES)),
) -> BillingItem:
    return BillingItemRepository(db).get_or_404(billing_item_id, organization_scope(principal))


@router.post(
    "/",
    response_model=BillingItemResponse,
    status_code=201,
    summary="Create billing item",
    responses={
        404: {"description": "Billing code or patient not found"},
        409: {"description": "Billing code is inactive"},
    },
)
async def create_billing_item(
    data: BillingItemCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ROLES)),
) -> BillingItem:
    """Charge a billing code; the code must belong to the same organization and be active."""
    ensure_organization_access(principal, data.organization_id)
    billing_code = BillingCodeRepository(db).get_or_404(data.billing_code_id, data.organization_id)
    if not billing_code.active:
        raise ConflictError(f"Billing code {billing_code.code} is inactive")
    if data.patient_id is not None:
        PatientRepository(db).get_or_404(data.patient_id)
    return BillingItemRepository(db).create(data.model_dump())


@router.put(
    "/{billing_item_id}",
    response_model=BillingItemResponse,
    summary="Update billing item",
    responses={404: {"description": "Billing item not found"}},
)
async def update_billing_item(
    billing_item_id: UUID,
    data: BillingItemUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ROLES)),
) -> BillingItem:
    repo = BillingItemRepository(db)
    item = repo.get_or_404(billing_item_id, organization_scope(principal))
    return repo.update(item, data.model_dump(exclude_unset=True))


@router.delete(
    "/{billing_item_id}",
    status_code=204,
    summary="Delete billing item",
    responses={404: {"description": "Billing item not found"}},
)
async def delete_billing_item(
    billing_item_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
) -> None:
    BillingItemRepository(db).delete(billing_item_id, organization_scope(principal))
