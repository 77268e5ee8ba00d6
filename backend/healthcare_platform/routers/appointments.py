"""Appointment scheduling endpoints."""

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import (
    ADMINS,
    CLINICAL_STAFF,
    Principal,
    Role,
    ensure_organization_access,
    organization_scope,
    require_roles,
)
from healthcare_platform.core.database import get_db
from healthcare_platform.core.exceptions import ConflictError, ValidationError
from healthcare_platform.models.appointment import Appointment, AppointmentStatus
from healthcare_platform.models.shared import ensure_utc
from healthcare_platform.repositories.appointment_repository import AppointmentRepository
from healthcare_platform.repositories.department_repository import DepartmentRepository
from healthcare_platform.repositories.organization_repository import OrganizationRepository
from healthcare_platform.repositories.patient_repository import PatientRepository
from healthcare_platform.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentSearch,
    AppointmentUpdate,
)
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()
logger = logging.getLogger(__name__)

AUDIT_RESOURCE = "appointment"
READERS = (*ADMINS, *CLINICAL_STAFF)
WRITERS = (*ADMINS, Role.DEPARTMENT_HEAD, Role.MEDICAL_DOCTOR, Role.RECEPTIONIST)
CANCELLERS = (*ADMINS, Role.DEPARTMENT_HEAD, Role.RECEPTIONIST)


def _check_slot(
    repo: AppointmentRepository,
    start_time: datetime,
    end_time: datetime,
    provider_id: UUID,
    patient_id: UUID,
    exclude_id: UUID | None = None,
) -> None:
    """Reject an empty or inverted window and any double booking."""
    start_time, end_time = ensure_utc(start_time), ensure_utc(end_time)
    if start_time >= end_time:
        raise ValidationError("start_time must be before end_time")
    if repo.find_overlap(start_time, end_time, provider_id=provider_id, exclude_id=exclude_id):
        raise ConflictError(f"Provider {provider_id} already has an appointment in this time range")
    if repo.find_overlap(start_time, end_time, patient_id=patient_id, exclude_id=exclude_id):
        raise ConflictError(f"Patient {patient_id} already has an appointment in this time range")


@router.patch("/", response_model=Page[AppointmentResponse], summary="Search appointments")
async def search_appointments(
    data: AppointmentSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> dict[str, Any]:
    """Search appointments; ordered by start time unless ``sort`` says otherwise."""
    scope = organization_scope(principal, data.organization_id)
    rows, total, window = AppointmentRepository(db).search(data, organization_id=scope)
    return build_page(AppointmentResponse, rows, total, window)


@router.get(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Get appointment",
    responses={404: {"description": "Appointment not found"}},
)
async def get_appointment(
    appointment_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> Appointment:
    return AppointmentRepository(db).get_or_404(
        appointment_id, organization_scope(principal), include_deleted=True
    )


@router.post(
    "/",
    response_model=AppointmentResponse,
    status_code=201,
    summary="Book appointment",
    responses={
        404: {"description": "Organization, department or patient not found"},
        409: {"description": "Provider or patient is already booked"},
        422: {"description": "Invalid time range"},
    },
)
async def create_appointment(
    data: AppointmentCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*WRITERS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Appointment:
    """Book an appointment.

    The organization, the department (when given) and the patient must all be
    live, and neither the provider nor the patient may already be booked in an
    overlapping window.
    """
    ensure_organization_access(principal, data.organization_id)
    OrganizationRepository(db).get_active(data.organization_id)
    if data.department_id is not None:
        DepartmentRepository(db).get_active(data.organization_id, data.department_id)
    PatientRepository(db).get_or_404(data.patient_id)

    repo = AppointmentRepository(db)
    _check_slot(repo, data.start_time, data.end_time, data.provider_id, data.patient_id)
    appointment = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(appointment, principal)
    db.commit()
    db.refresh(appointment)
    logger.info("Booked appointment %s for patient %s", appointment.id, appointment.patient_id)
    return appointment


@router.put(
    "/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Update appointment",
    responses={
        404: {"description": "Appointment not found"},
        409: {"description": "Provider or patient is already booked"},
    },
)
async def update_appointment(
    appointment_id: UUID,
    data: AppointmentUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*WRITERS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Appointment:
    """Reschedule or change an appointment.

    A request that only moves ``status`` is audited as ``status_changed``;
    anything else as ``updated``.
    """
    repo = AppointmentRepository(db)
    appointment = repo.get_or_404(appointment_id, organization_scope(principal))
    changes = data.model_dump(exclude_unset=True)

    for required in ("provider_id", "status", "appointment_type", "start_time", "end_time"):
        if required in changes and changes[required] is None:
            raise ValidationError(f"{required} cannot be null")
    if changes.get("department_id") is not None:
        DepartmentRepository(db).get_active(appointment.organization_id, changes["department_id"])

    new_status = changes.get("status", appointment.status)
    if {"start_time", "end_time", "provider_id", "status"} & changes.keys() and (
        new_status != AppointmentStatus.CANCELLED.value
    ):
        _check_slot(
            repo,
            changes.get("start_time", appointment.start_time),
            changes.get("end_time", appointment.end_time),
            changes.get("provider_id", appointment.provider_id),
            appointment.patient_id,
            exclude_id=appointment.id,
        )

    old_status = appointment.status
    before = snapshot(appointment)
    repo.update(appointment, changes, commit=False)
    audit = AuditService(audit_sink, AUDIT_RESOURCE)
    if changes.keys() == {"status"} and old_status != new_status:
        audit.log_status_change(appointment, old_status, new_status, principal)
    else:
        audit.log_update(appointment, before, principal)
    db.commit()
    db.refresh(appointment)
    return appointment


@router.delete(
    "/{appointment_id}",
    status_code=204,
    summary="Archive appointment",
    responses={404: {"description": "Appointment not found"}},
)
async def delete_appointment(
    appointment_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*CANCELLERS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    scope = organization_scope(principal)
    repo = AppointmentRepository(db)
    appointment = repo.get_or_404(appointment_id, scope)
    repo.delete(appointment_id, scope, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(appointment, principal)
    db.commit()
