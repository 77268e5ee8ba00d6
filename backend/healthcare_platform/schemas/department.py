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


class DepartmentCreate(CreateModel):
    organization_id: UUID
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: str = Field(default="active", max_length=20)


class DepartmentUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: str | None = Field(default=None, max_length=20)


class DepartmentSearch(SearchRequest):
    organization_id: UUID | None = None
    code: str | None = None
    name: str | None = None
    status: str | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class DepartmentResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    code: str
    name: str
    description: str | None
    status: str
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
