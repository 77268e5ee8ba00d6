"""Pydantic schemas for billing codes and the billing items that reference them."""

from decimal import Decimal
from uuid import UUID

from pydantic import Field

from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
    UtcDateTime,
)


class BillingCodeCreate(CreateModel):
    organization_id: UUID
    code: str = Field(..., min_length=1, max_length=50)
    code_system: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    active: bool = True


class BillingCodeUpdate(UpdateModel):
    code: str | None = Field(default=None, min_length=1, max_length=50)
    code_system: str | None = Field(default=None, min_length=1, max_length=50)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    active: bool | None = None


class BillingCodeSearch(SearchRequest):
    organization_id: UUID | None = None
    code: str | None = None
    code_system: str | None = None
    name: str | None = None
    active: bool | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class BillingCodeResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    code: str
    code_system: str
    name: str
    description: str | None
    active: bool
    created_at: IsoDateTime
    updated_at: IsoDateTime


class BillingItemCreate(CreateModel):
    organization_id: UUID
    billing_code_id: UUID
    patient_id: UUID | None = None
    description: str = Field(..., min_length=1, max_length=500)
    quantity: int = Field(default=1, ge=1)
    unit_price: Decimal = Field(..., ge=0, decimal_places=2)


class BillingItemUpdate(UpdateModel):
    description: str | None = Field(default=None, min_length=1, max_length=500)
    quantity: int | None = Field(default=None, ge=1)
    unit_price: Decimal | None = Field(default=None, ge=0, decimal_places=2)


class BillingItemSearch(SearchRequest):
    organization_id: UUID | None = None
    billing_code_id: UUID | None = None
    patient_id: UUID | None = None
    description: str | None = None
    quantity_min: int | None = None
    quantity_max: int | None = None
    unit_price_min: Decimal | None = None
    unit_price_max: Decimal | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class BillingItemResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    billing_code_id: UUID
    patient_id: UUID | None
    description: str
    quantity: int
    unit_price: Decimal
    created_at: IsoDateTime
    updated_at: IsoDateTime
