"""Tests for AuditService, its sinks and the snapshot/diff helpers."""

from datetime import UTC, datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from healthcare_platform.core.auth import Principal, Role
from healthcare_platform.models.audit_log import AuditLog
from healthcare_platform.models.organization import Organization
from healthcare_platform.services.audit_service import (
    AuditEvent,
    AuditService,
    InMemoryAuditSink,
    SqlAlchemyAuditSink,
    _jsonable,
    diff,
    snapshot,
)


@pytest.fixture
def principal():
    return Principal(id=uuid4(), role=Role.SYSTEM_ADMIN)


@pytest.fixture
def org(db_session):
    org = Organization(code="AUD", name="Audit Clinic")
    db_session.add(org)
    db_session.commit()
    return org


class TestHelpers:
    def test_jsonable(self):
        some_id = uuid4()
        assert _jsonable(some_id) == str(some_id)
        assert _jsonable(Decimal("12.50")) == "12.50"
        assert _jsonable(datetime(2026, 3, 1, 8, 30)) == "2026-03-01T08:30:00+00:00"
        assert _jsonable(Role.NURSE) == "nurse"
        assert _jsonable(None) is None

    def test_snapshot_contains_every_column(self, org):
        data = snapshot(org)
        assert set(data) == {"id", "code", "name", "status", "created_at", "updated_at", "deleted_at"}
        assert data["code"] == "AUD"
        assert data["deleted_at"] is None

    def test_diff_ignores_updated_at(self):
        old = {"name": "A", "status": "active", "updated_at": "t1"}
        new = {"name": "B", "status": "active", "updated_at": "t2"}
        assert diff(old, new) == {"name": {"old": "A", "new": "B"}}

    def test_diff_empty_when_unchanged(self):
        assert diff({"a": 1}, {"a": 1}) == {}


class TestAuditService:
    def test_log_create(self, org, principal):
        sink = InMemoryAuditSink()
        event = AuditService(sink, "organization").log_create(org, principal)
        assert sink.events == [event]
        assert event.action_type == "created"
        assert event.related_entity_type == "organization"
        assert event.related_entity_id == org.id
        assert event.user_id == principal.id
        assert event.event_context["data"]["code"] == "AUD"

    def test_log_update_records_changes(self, db_session, org, principal):
        sink = InMemoryAuditSink()
        before = snapshot(org)
        org.name = "Renamed"
        event = AuditService(sink, "organization").log_update(org, before, principal)
        assert event.action_type == "updated"
        assert event.event_context == {"changes": {"name": {"old": "Audit Clinic", "new": "Renamed"}}}

    def test_log_update_emits_even_without_changes(self, org, principal):
        sink = InMemoryAuditSink()
        AuditService(sink, "organization").log_update(org, snapshot(org), principal)
        assert len(sink.events) == 1
        assert sink.events[0].event_context == {"changes": {}}

    def test_log_status_change(self, org, principal):
        sink = InMemoryAuditSink()
        event = AuditService(sink, "organization").log_status_change(org, "active", "suspended", principal)
        assert event.action_type == "status_changed"
        assert event.event_context["changes"]["status"] == {"old": "active", "new": "suspended"}

    def test_log_delete(self, org, principal):
        sink = InMemoryAuditSink()
        soft = AuditService(sink, "organization").log_delete(org, principal)
        hard = AuditService(sink, "organization").log_delete(org, principal, hard=True)
        assert soft.event_context == {"hard_delete": False}
        assert hard.event_context == {"hard_delete": True}

    def test_system_actor(self, org):
        sink = InMemoryAuditSink()
        event = AuditService(sink, "organization").log_create(org)
        assert event.user_id is None

    def test_organization_taken_from_record(self, principal, default_org_id):
        sink = InMemoryAuditSink()

        class Scoped:
            id = uuid4()
            organization_id = default_org_id

        event = AuditService(sink, "department").log_delete(Scoped(), principal)
        assert event.organization_id == default_org_id


class TestSqlAlchemyAuditSink:
    def test_row_visible_only_after_commit(self, db_session):
        sink = SqlAlchemyAuditSink(db_session)
        event = AuditEvent(
            user_id=uuid4(),
            action_type="created",
            related_entity_type="patient",
            related_entity_id=uuid4(),
            event_context={"data": {"email": "x@example.com"}},
            created_at=datetime(2026, 5, 1, tzinfo=UTC),
        )
        sink.record(event)
        db_session.rollback()
        assert db_session.query(AuditLog).count() == 0

        sink.record(event)
        db_session.commit()
        row = db_session.query(AuditLog).one()
        assert row.related_entity_id == event.related_entity_id
        assert row.event_context == {"data": {"email": "x@example.com"}}
