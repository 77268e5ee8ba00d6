from typing import Literal
from uuid import UUID

from pydantic import Field

from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
)

ScopeType = Literal["platform", "organization", "department"]


class RoleCreate(CreateModel):
    code: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    scope_type: ScopeType = "organization"
    status: str = Field(default="active", max_length=20)


class RoleUpdate(UpdateModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    scope_type: ScopeType | None = None
    status: str | None = Field(default=None, max_length=20)


class RoleSearch(SearchRequest):
    code: str | None = None
    name: str | None = None
    scope_type: ScopeType | None = None
    status: str | None = None


class RoleResponse(ResponseModel):
    id: UUID
    code: str
    name: str
    description: str | None
    scope_type: str
    status: str
    created_at: IsoDateTime
    updated_at: IsoDateTime
