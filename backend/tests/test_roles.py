"""Tests for the RBAC role catalogue endpoints."""

import pytest

from healthcare_platform.models.audit_log import AuditLog


@pytest.fixture
def role(admin_client):
    response = admin_client.post(
        "/v1/roles/",
        json={"code": "billing_clerk", "name": "Billing clerk", "scope_type": "organization"},
    )
    assert response.status_code == 201
    return response.json()


class TestRoles:
    def test_create(self, role):
        assert role["status"] == "active"
        assert role["description"] is None

    def test_duplicate_code(self, admin_client, role):
        response = admin_client.post("/v1/roles/", json={"code": "billing_clerk", "name": "Again"})
        assert response.status_code == 409

    def test_invalid_scope(self, admin_client):
        response = admin_client.post("/v1/roles/", json={"code": "x", "name": "X", "scope_type": "galaxy"})
        assert response.status_code == 422

    def test_org_admin_reads_only(self, org_admin_client, role):
        assert org_admin_client.get(f"/v1/roles/{role['id']}").status_code == 200
        assert org_admin_client.put(f"/v1/roles/{role['id']}", json={"name": "X"}).status_code == 403
        assert org_admin_client.post("/v1/roles/", json={"code": "y", "name": "Y"}).status_code == 403

    def test_update_and_delete_audited(self, admin_client, role, db_session):
        url = f"/v1/roles/{role['id']}"
        assert admin_client.put(url, json={"description": "Handles invoices"}).status_code == 200
        assert admin_client.delete(url).status_code == 204
        assert admin_client.get(url).status_code == 404
        assert admin_client.delete(url).status_code == 404

        logs = db_session.query(AuditLog).filter(AuditLog.related_entity_id == role["id"]).all()
        assert sorted(log.action_type for log in logs) == ["created", "deleted", "updated"]

    def test_search(self, admin_client, role):
        admin_client.post("/v1/roles/", json={"code": "auditor", "name": "Auditor", "scope_type": "platform"})
        body = admin_client.patch("/v1/roles/", json={"scope_type": "platform"}).json()
        assert [r["code"] for r in body["data"]] == ["auditor"]
        body = admin_client.patch("/v1/roles/", json={"sort": "code:asc"}).json()
        assert [r["code"] for r in body["data"]] == ["auditor", "billing_clerk"]

    def test_required_fields_cannot_be_cleared(self, admin_client, role):
        for field in ("name", "scope_type", "status"):
            response = admin_client.put(f"/v1/roles/{role['id']}", json={field: None})
            assert response.status_code == 422, field
        assert admin_client.put(f"/v1/roles/{role['id']}", json={"description": None}).status_code == 200
