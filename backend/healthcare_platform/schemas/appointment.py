from uuid import UUID

from pydantic import Field

from healthcare_platform.models.appointment import AppointmentStatus
from healthcare_platform.schemas.common import (
    CreateModel,
    IsoDateTime,
    ResponseModel,
    SearchRequest,
    UpdateModel,
    UtcDateTime,
)


class AppointmentCreate(CreateModel):
    organization_id: UUID
    department_id: UUID | None = None
    provider_id: UUID
    patient_id: UUID
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    appointment_type: str = Field(..., min_length=1, max_length=50)
    start_time: UtcDateTime
    end_time: UtcDateTime
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None


class AppointmentUpdate(UpdateModel):
    department_id: UUID | None = None
    provider_id: UUID | None = None
    status: AppointmentStatus | None = None
    appointment_type: str | None = Field(default=None, min_length=1, max_length=50)
    start_time: UtcDateTime | None = None
    end_time: UtcDateTime | None = None
    title: str | None = Field(default=None, max_length=255)
    description: str | None = None


class AppointmentSearch(SearchRequest):
    organization_id: UUID | None = None
    department_id: UUID | None = None
    provider_id: UUID | None = None
    patient_id: UUID | None = None
    status: AppointmentStatus | None = None
    appointment_type: str | None = None
    title: str | None = None
    start_time_from: UtcDateTime | None = None
    start_time_to: UtcDateTime | None = None
    end_time_from: UtcDateTime | None = None
    end_time_to: UtcDateTime | None = None


class AppointmentResponse(ResponseModel):
    id: UUID
    organization_id: UUID
    department_id: UUID | None
    provider_id: UUID
    patient_id: UUID
    status: str
    appointment_type: str
    start_time: IsoDateTime
    end_time: IsoDateTime
    title: str | None
    description: str | None
    created_at: IsoDateTime
    updated_at: IsoDateTime
    deleted_at: IsoDateTime | None
