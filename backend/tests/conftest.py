"""Shared test fixtures for all test modules."""

import contextlib
import uuid
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import healthcare_platform.models  # noqa: F401
from healthcare_platform.core import database as db_module
from healthcare_platform.core.auth import Role
from healthcare_platform.core.config import settings
from healthcare_platform.core.database import Base, get_db
from healthcare_platform.main import app
from healthcare_platform.models.organization import Organization
from healthcare_platform.services.audit_service import InMemoryAuditSink, get_audit_sink

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# Well-known organizations seeded before every test
DEFAULT_ORG_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
OTHER_ORG_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")
ADMIN_USER_ID = uuid.UUID("00000000-0000-0000-0000-0000000000aa")


def _seed_organizations(session: Session) -> None:
    for org_id, code in ((DEFAULT_ORG_ID, "DEFAULT"), (OTHER_ORG_ID, "OTHER")):
        if session.get(Organization, org_id) is None:
            session.add(Organization(id=org_id, code=code, name=f"{code.title()} Clinic"))
    session.commit()


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    session = _TestSessionLocal()
    try:
        _seed_organizations(session)
    finally:
        session.close()

    yield
    with _test_engine.connect() as conn:
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        conn.commit()

    app.dependency_overrides.clear()
    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def default_org_id():
    return DEFAULT_ORG_ID


@pytest.fixture
def other_org_id():
    return OTHER_ORG_ID


@pytest.fixture
def db_session():
    """Database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


@pytest.fixture
def make_token():
    """Mint a bearer token signed with the configured secret."""

    def _make(
        role: Role | str,
        organization_id: uuid.UUID | None = DEFAULT_ORG_ID,
        user_id: uuid.UUID = ADMIN_USER_ID,
        expires_in: timedelta | None = timedelta(hours=1),
    ) -> str:
        claims = {"sub": str(user_id), "role": Role(role).value}
        if organization_id is not None:
            claims["organization_id"] = str(organization_id)
        if expires_in is not None:
            claims["exp"] = datetime.now(UTC) + expires_in
        return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    return _make


@pytest.fixture
def client_for(make_token):
    """TestClient authenticated as ``role`` inside ``organization_id``."""

    def _client(role: Role | str, organization_id: uuid.UUID | None = DEFAULT_ORG_ID) -> TestClient:
        token = make_token(role, organization_id)
        return TestClient(app, headers={"Authorization": f"Bearer {token}"})

    return _client


@pytest.fixture
def client():
    """Unauthenticated client."""
    return TestClient(app)


@pytest.fixture
def admin_client(client_for):
    """System admin; not tied to an organization."""
    return client_for(Role.SYSTEM_ADMIN, None)


@pytest.fixture
def org_admin_client(client_for):
    return client_for(Role.ORGANIZATION_ADMIN, DEFAULT_ORG_ID)


@pytest.fixture
def audit_sink():
    """Route audit events to an in-memory sink for the duration of a test."""
    sink = InMemoryAuditSink()
    app.dependency_overrides[get_audit_sink] = lambda: sink
    yield sink
    app.dependency_overrides.pop(get_audit_sink, None)


@pytest.fixture
def patient(admin_client):
    response = admin_client.post(
        "/v1/patients/",
        json={
            "email": "jane.doe@example.com",
            "full_name": "Jane Doe",
            "date_of_birth": "1985-04-12",
            "phone": "+1-555-0100",
        },
    )
    assert response.status_code == 201
    return response.json()
