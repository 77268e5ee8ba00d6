from datetime import date
from uuid import UUID

from pydantic import EmailStr, Field

from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDate,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
    UtcDateTime,
)


class PatientCreate(CreateModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1, max_length=255)
    date_of_birth: date
    phone: str | None = Field(default=None, max_length=50)


class PatientUpdate(UpdateModel):
    email: EmailStr | None = None
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    date_of_birth: date | None = None
    phone: str | None = Field(default=None, max_length=50)


class PatientSearch(SearchRequest):
    email: str | None = None
    full_name: str | None = None
    phone: str | None = None
    date_of_birth_from: date | None = None
    date_of_birth_to: date | None = None
    created_at_from: UtcDateTime | None = None
    created_at_to: UtcDateTime | None = None


class PatientResponse(ResponseModel):
    id: UUID
    email: str
    full_name: str
    date_of_birth: IsoDate
    phone: str | None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
