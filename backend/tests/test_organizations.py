"""Tests for the organization endpoints."""

import pytest
from fastapi.testclient import TestClient

from healthcare_platform.core.auth import Role
from healthcare_platform.main import app
from healthcare_platform.models.audit_log import AuditLog
from healthcare_platform.models.organization import Organization
from healthcare_platform.services.audit_service import get_audit_sink


@pytest.fixture
def acme(admin_client):
    response = admin_client.post("/v1/organizations/", json={"code": "ACME", "name": "Acme Health"})
    assert response.status_code == 201
    return response.json()


class TestCreateOrganization:
    def test_create(self, admin_client, db_session):
        response = admin_client.post("/v1/organizations/", json={"code": "ACME", "name": "Acme Health"})
        assert response.status_code == 201
        body = response.json()
        assert body["code"] == "ACME"
        assert body["status"] == "active"
        assert body["deleted_at"] is None
        assert body["created_at"].endswith("Z")

        logs = db_session.query(AuditLog).filter(AuditLog.related_entity_id == body["id"]).all()
        assert [log.action_type for log in logs] == ["created"]
        assert logs[0].related_entity_type == "organization"

    def test_duplicate_code(self, admin_client, acme, db_session):
        response = admin_client.post("/v1/organizations/", json={"code": "ACME", "name": "Other"})
        assert response.status_code == 409
        assert "ACME" in response.json()["detail"]

        first = admin_client.get(f"/v1/organizations/{acme['id']}").json()
        assert first["status"] == "active"
        assert first["name"] == "Acme Health"
        assert db_session.query(Organization).filter(Organization.code == "ACME").count() == 1

    def test_code_of_archived_org_stays_reserved(self, admin_client, acme):
        assert admin_client.delete(f"/v1/organizations/{acme['id']}").status_code == 204
        response = admin_client.post("/v1/organizations/", json={"code": "ACME", "name": "Again"})
        assert response.status_code == 409

    def test_invalid_status(self, admin_client):
        response = admin_client.post(
            "/v1/organizations/", json={"code": "X", "name": "X", "status": "bogus"}
        )
        assert response.status_code == 422

    def test_org_admin_cannot_create(self, org_admin_client):
        response = org_admin_client.post("/v1/organizations/", json={"code": "NEW", "name": "New"})
        assert response.status_code == 403

    def test_audit_failure_rolls_back_write(self, make_token, db_session):
        class BrokenSink:
            def record(self, event):
                raise RuntimeError("audit store unavailable")

        app.dependency_overrides[get_audit_sink] = lambda: BrokenSink()
        token = make_token(Role.SYSTEM_ADMIN, None)
        client = TestClient(
            app, raise_server_exceptions=False, headers={"Authorization": f"Bearer {token}"}
        )
        response = client.post("/v1/organizations/", json={"code": "LOST", "name": "Lost"})
        assert response.status_code == 500
        assert db_session.query(Organization).filter(Organization.code == "LOST").count() == 0


class TestSearchOrganizations:
    def test_system_admin_sees_all(self, admin_client, acme):
        response = admin_client.patch("/v1/organizations/", json={})
        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {"current": 1, "limit": 20, "records": 3, "pages": 1}
        assert {o["code"] for o in body["data"]} == {"DEFAULT", "OTHER", "ACME"}

    def test_org_admin_sees_only_own(self, org_admin_client, default_org_id):
        body = org_admin_client.patch("/v1/organizations/", json={}).json()
        assert body["pagination"]["records"] == 1
        assert body["data"][0]["id"] == str(default_org_id)

    def test_filter_and_sort(self, admin_client, acme):
        body = admin_client.patch(
            "/v1/organizations/", json={"name": "clinic", "sort": "code", "order": "asc"}
        ).json()
        assert [o["code"] for o in body["data"]] == ["DEFAULT", "OTHER"]

    def test_unknown_sort_field_uses_default(self, admin_client, acme):
        response = admin_client.patch("/v1/organizations/", json={"sort": "secret_column"})
        assert response.status_code == 200
        assert response.json()["data"][0]["code"] == "ACME"

    def test_unknown_sort_field_keeps_requested_order(self, admin_client, acme):
        response = admin_client.patch("/v1/organizations/", json={"sort": "secret_column", "order": "asc"})
        assert response.status_code == 200
        assert response.json()["data"][-1]["code"] == "ACME"

    def test_excludes_archived_unless_requested(self, admin_client, acme):
        admin_client.delete(f"/v1/organizations/{acme['id']}")
        codes = {o["code"] for o in admin_client.patch("/v1/organizations/", json={}).json()["data"]}
        assert "ACME" not in codes

        body = admin_client.patch("/v1/organizations/", json={"include_deleted": True}).json()
        archived = [o for o in body["data"] if o["code"] == "ACME"]
        assert archived[0]["deleted_at"] is not None


class TestGetOrganization:
    def test_get(self, admin_client, acme):
        response = admin_client.get(f"/v1/organizations/{acme['id']}")
        assert response.status_code == 200
        assert response.json() == acme

    def test_unknown(self, admin_client):
        response = admin_client.get("/v1/organizations/00000000-0000-0000-0000-00000000ffff")
        assert response.status_code == 404

    def test_other_tenant_is_not_found(self, org_admin_client, other_org_id):
        assert org_admin_client.get(f"/v1/organizations/{other_org_id}").status_code == 404

    def test_malformed_id(self, admin_client):
        assert admin_client.get("/v1/organizations/not-a-uuid").status_code == 422


class TestUpdateOrganization:
    def test_update(self, admin_client, acme, db_session):
        response = admin_client.put(
            f"/v1/organizations/{acme['id']}", json={"name": "Acme Medical", "status": "suspended"}
        )
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Acme Medical"
        assert body["status"] == "suspended"
        assert body["code"] == "ACME"

        log = (
            db_session.query(AuditLog)
            .filter(AuditLog.related_entity_id == acme["id"], AuditLog.action_type == "updated")
            .one()
        )
        assert log.event_context["changes"]["name"] == {"old": "Acme Health", "new": "Acme Medical"}
        assert "updated_at" not in log.event_context["changes"]

    def test_required_fields_cannot_be_cleared(self, admin_client, acme, db_session):
        for field in ("name", "status"):
            response = admin_client.put(f"/v1/organizations/{acme['id']}", json={field: None})
            assert response.status_code == 422, field
        assert admin_client.get(f"/v1/organizations/{acme['id']}").json()["name"] == "Acme Health"
        assert db_session.query(AuditLog).filter(AuditLog.action_type == "updated").count() == 0

    def test_code_is_immutable(self, admin_client, acme):
        response = admin_client.put(f"/v1/organizations/{acme['id']}", json={"code": "NEW"})
        assert response.status_code == 422

    def test_update_archived(self, admin_client, acme):
        admin_client.delete(f"/v1/organizations/{acme['id']}")
        response = admin_client.put(f"/v1/organizations/{acme['id']}", json={"name": "Ghost"})
        assert response.status_code == 404


class TestDeleteOrganization:
    def test_soft_delete(self, admin_client, acme, db_session):
        assert admin_client.delete(f"/v1/organizations/{acme['id']}").status_code == 204

        body = admin_client.get(f"/v1/organizations/{acme['id']}").json()
        assert body["deleted_at"] is not None
        actions = [
            log.action_type
            for log in db_session.query(AuditLog).filter(AuditLog.related_entity_id == acme["id"])
        ]
        assert sorted(actions) == ["created", "deleted"]

    def test_second_delete_is_not_found(self, admin_client, acme):
        assert admin_client.delete(f"/v1/organizations/{acme['id']}").status_code == 204
        assert admin_client.delete(f"/v1/organizations/{acme['id']}").status_code == 404

    def test_refused_while_departments_exist(self, admin_client, acme):
        admin_client.post(
            "/v1/departments/",
            json={"organization_id": acme["id"], "code": "CARD", "name": "Cardiology"},
        )
        response = admin_client.delete(f"/v1/organizations/{acme['id']}")
        assert response.status_code == 409
        assert "departments" in response.json()["detail"]
        assert admin_client.get(f"/v1/organizations/{acme['id']}").json()["deleted_at"] is None
