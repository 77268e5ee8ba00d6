from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from healthcare_platform.core.config import settings
from healthcare_platform.core.database import init_db
from healthcare_platform.core.logging import configure_logging
from healthcare_platform.routers import (
    appointments,
    audit_logs,
    billing_codes,
    billing_items,
    compliance_reviews,
    departments,
    insurance_policies,
    legal_holds,
    locale_settings,
    notifications,
    organizations,
    patients,
    roles,
)

OPENAPI_TAGS = [
    {"name": "Organizations", "description": "Manage tenant organizations."},
    {"name": "Departments", "description": "Manage departments within an organization."},
    {"name": "Patients", "description": "Register and maintain patient records."},
    {"name": "Appointments", "description": "Book and reschedule appointments."},
    {"name": "Insurance Policies", "description": "Track patient insurance coverage."},
    {"name": "Locale Settings", "description": "Language and format settings per organization or department."},
    {"name": "Billing", "description": "Billing code catalogue and billed items."},
    {"name": "Compliance", "description": "Legal holds and compliance reviews."},
    {"name": "Notifications", "description": "Outbound notification records."},
    {"name": "Roles", "description": "RBAC role catalogue."},
    {"name": "Audit Logs", "description": "Query the audit trail."},
]

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    init_db()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.version,
    description=(
        "Administrative API of a multi-tenant healthcare platform. "
        "Every entity offers filtered, sorted and paginated search plus audited CRUD."
    ),
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(organizations.router, prefix="/v1/organizations", tags=["Organizations"])
app.include_router(departments.router, prefix="/v1/departments", tags=["Departments"])
app.include_router(patients.router, prefix="/v1/patients", tags=["Patients"])
app.include_router(appointments.router, prefix="/v1/appointments", tags=["Appointments"])
app.include_router(
    insurance_policies.router,
    prefix="/v1/insurance_policies",
    tags=["Insurance Policies"],
)
app.include_router(
    locale_settings.router,
    prefix="/v1/locale_settings",
    tags=["Locale Settings"],
)
app.include_router(billing_codes.router, prefix="/v1/billing_codes", tags=["Billing"])
app.include_router(billing_items.router, prefix="/v1/billing_items", tags=["Billing"])
app.include_router(legal_holds.router, prefix="/v1/legal_holds", tags=["Compliance"])
app.include_router(
    compliance_reviews.router,
    prefix="/v1/compliance_reviews",
    tags=["Compliance"],
)
app.include_router(notifications.router, prefix="/v1/notifications", tags=["Notifications"])
app.include_router(roles.router, prefix="/v1/roles", tags=["Roles"])
app.include_router(audit_logs.router, prefix="/v1/audit_logs", tags=["Audit Logs"])


@app.get("/")
async def root() -> dict[str, str]:
    return {
        "app": settings.APP_NAME,
        "version": settings.version,
        "status": "running",
    }
