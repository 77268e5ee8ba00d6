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


class LocaleSettingCreate(CreateModel):
    organization_id: UUID
    department_id: UUID | None = None
    language: str = Field(..., min_length=2, max_length=20)
    timezone: str = Field(default="UTC", max_length=50)
    date_format: str | None = Field(default=None, max_length=30)
    time_format: str | None = Field(default=None, max_length=10)
    number_format: str | None = Field(default=None, max_length=30)


class LocaleSettingUpdate(UpdateModel):
    language: str | None = Field(default=None, min_length=2, max_length=20)
    timezone: str | None = Field(default=None, max_length=50)
    date_format: str | None = Field(default=None, max_length=30)
    time_format: str | None = Field(default=None, max_length=10)
    number_format: str | None = Field(default=None, max_length=30)


class LocaleSettingSearch(SearchRequest):
    organization_id: UUID | None = None
    department_id: UUID | None = None
    language: str | None = None
    timezone: str | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class LocaleSettingResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    department_id: UUID | None
    language: str
    timezone: str
    date_format: str | None
    time_format: str | None
    number_format: str | None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
