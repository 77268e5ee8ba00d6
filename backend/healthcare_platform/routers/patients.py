"""Patient endpoints. Patients are platform-wide and not tenant-scoped."""

from typing import Any
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from healthcare_platform.core.auth import ADMINS, CLINICAL_STAFF, Principal, Role, require_roles
from healthcare_platform.core.database import commit_or_conflict, get_db
from healthcare_platform.core.exceptions import ConflictError
from healthcare_platform.models.patient import Patient
from healthcare_platform.repositories.patient_repository import PatientRepository
from healthcare_platform.schemas.common import Page, build_page
from healthcare_platform.schemas.patient import (
    PatientCreate,
    PatientResponse,
    PatientSearch,
    PatientUpdate,
)
from healthcare_platform.services.audit_service import AuditService, AuditSink, get_audit_sink, snapshot

router = APIRouter()

AUDIT_RESOURCE = "patient"
READERS = (*ADMINS, *CLINICAL_STAFF)
WRITERS = (*ADMINS, Role.RECEPTIONIST)


@router.patch("/", response_model=Page[PatientResponse], summary="Search patients")
async def search_patients(
    data: PatientSearch,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> dict[str, Any]:
    rows, total, window = PatientRepository(db).search(data)
    return build_page(PatientResponse, rows, total, window)


@router.get(
    "/{patient_id}",
    response_model=PatientResponse,
    summary="Get patient",
    responses={404: {"description": "Patient not found"}},
)
async def get_patient(
    patient_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*READERS)),
) -> Patient:
    return PatientRepository(db).get_or_404(patient_id, include_deleted=True)


@router.post(
    "/",
    response_model=PatientResponse,
    status_code=201,
    summary="Register patient",
    responses={409: {"description": "E-mail already registered"}},
)
async def create_patient(
    data: PatientCreate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*WRITERS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Patient:
    repo = PatientRepository(db)
    if repo.email_exists(data.email):
        raise ConflictError("A patient with this e-mail already exists")
    patient = repo.create(data.model_dump(), commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_create(patient, principal)
    commit_or_conflict(db, "A patient with this e-mail already exists")
    db.refresh(patient)
    return patient


@router.put(
    "/{patient_id}",
    response_model=PatientResponse,
    summary="Update patient",
    responses={
        404: {"description": "Patient not found"},
        409: {"description": "E-mail already registered"},
    },
)
async def update_patient(
    patient_id: UUID,
    data: PatientUpdate,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*WRITERS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> Patient:
    repo = PatientRepository(db)
    patient = repo.get_or_404(patient_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("email") and repo.email_exists(changes["email"], exclude_id=patient_id):
        raise ConflictError("A patient with this e-mail already exists")
    before = snapshot(patient)
    repo.update(patient, changes, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_update(patient, before, principal)
    commit_or_conflict(db, "A patient with this e-mail already exists")
    db.refresh(patient)
    return patient


@router.delete(
    "/{patient_id}",
    status_code=204,
    summary="Archive patient",
    responses={404: {"description": "Patient not found"}},
)
async def delete_patient(
    patient_id: UUID,
    db: Session = Depends(get_db),
    principal: Principal = Depends(require_roles(*ADMINS)),
    audit_sink: AuditSink = Depends(get_audit_sink),
) -> None:
    repo = PatientRepository(db)
    patient = repo.get_or_404(patient_id)
    repo.delete(patient_id, commit=False)
    AuditService(audit_sink, AUDIT_RESOURCE).log_delete(patient, principal)
    db.commit()
