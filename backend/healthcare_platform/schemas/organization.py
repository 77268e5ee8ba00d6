from uuid import UUID

from pydantic import Field

from healthcare_platform.models.organization import OrganizationStatus
from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
    UtcDateTime,
)


class OrganizationCreate(CreateModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    status: OrganizationStatus = OrganizationStatus.ACTIVE


class OrganizationUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    status: OrganizationStatus | None = None


class OrganizationSearch(SearchRequest):
    code: str | None = None
    name: str | None = None
    status: OrganizationStatus | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class OrganizationResponse(ResponseModel):
    id: UUID
    code: str
    name: str
    status: str
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
