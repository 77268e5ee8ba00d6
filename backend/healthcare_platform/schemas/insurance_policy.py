from datetime import date
from uuid import UUID

from pydantic import Field

from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDate,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
)


class InsurancePolicyCreate(CreateModel):
    organization_id: UUID
    patient_id: UUID
    policy_number: str = Field(..., min_length=1, max_length=100)
    payer_name: str = Field(..., min_length=1, max_length=255)
    group_number: str | None = Field(default=None, max_length=100)
    coverage_start_date: date
    coverage_end_date: date | None = None
    plan_type: str = Field(..., min_length=1, max_length=50)
    policy_status: str = Field(default="active", max_length=20)


class InsurancePolicyUpdate(UpdateModel):
    payer_name: str | None = Field(default=None, min_length=1, max_length=255)
    group_number: str | None = Field(default=None, max_length=100)
    coverage_start_date: date | None = None
    coverage_end_date: date | None = None
    plan_type: str | None = Field(default=None, min_length=1, max_length=50)
    policy_status: str | None = Field(default=None, max_length=20)


class InsurancePolicySearch(SearchRequest):
    organization_id: UUID | None = None
    patient_id: UUID | None = None
    policy_status: str | None = None
    plan_type: str | None = None
    policy_number: str | None = None
    payer_name: str | None = None
    coverage_start_from: date | None = None
    coverage_start_to: date | None = None
    coverage_end_from: date | None = None
    coverage_end_to: date | None = None


class InsurancePolicyResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    patient_id: UUID
    policy_number: str
    payer_name: str
    group_number: str | None
    coverage_start_date: IsoDate
    coverage_end_date: IsoDate | None
    plan_type: str
    policy_status: str
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
