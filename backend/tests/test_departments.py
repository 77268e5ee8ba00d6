"""Tests for the department endpoints."""

import pytest

from healthcare_platform.core.auth import Role


@pytest.fixture
def cardiology(org_admin_client, default_org_id):
    response = org_admin_client.post(
        "/v1/departments/",
        json={"organization_id": str(default_org_id), "code": "CARD", "name": "Cardiology"},
    )
    assert response.status_code == 201
    return response.json()


class TestDepartments:
    def test_create(self, cardiology, default_org_id):
        assert cardiology["organization_id"] == str(default_org_id)
        assert cardiology["status"] == "active"
        assert cardiology["description"] is None

    def test_code_unique_per_organization(self, org_admin_client, admin_client, cardiology, default_org_id, other_org_id):
        duplicate = org_admin_client.post(
            "/v1/departments/",
            json={"organization_id": str(default_org_id), "code": "CARD", "name": "Again"},
        )
        assert duplicate.status_code == 409

        elsewhere = admin_client.post(
            "/v1/departments/",
            json={"organization_id": str(other_org_id), "code": "CARD", "name": "Cardiology"},
        )
        assert elsewhere.status_code == 201

    def test_cannot_create_in_other_tenant(self, org_admin_client, other_org_id):
        response = org_admin_client.post(
            "/v1/departments/",
            json={"organization_id": str(other_org_id), "code": "ER", "name": "Emergency"},
        )
        assert response.status_code == 403

    def test_organization_must_be_active(self, admin_client, other_org_id):
        admin_client.put(f"/v1/organizations/{other_org_id}", json={"status": "suspended"})
        response = admin_client.post(
            "/v1/departments/",
            json={"organization_id": str(other_org_id), "code": "ER", "name": "Emergency"},
        )
        assert response.status_code == 409

    def test_unknown_organization(self, admin_client):
        response = admin_client.post(
            "/v1/departments/",
            json={"organization_id": "00000000-0000-0000-0000-00000000ffff", "code": "ER", "name": "ER"},
        )
        assert response.status_code == 404

    def test_search_scoped_to_tenant(self, admin_client, cardiology, client_for, other_org_id):
        admin_client.post(
            "/v1/departments/",
            json={"organization_id": str(other_org_id), "code": "NEURO", "name": "Neurology"},
        )
        own = client_for(Role.DEPARTMENT_HEAD).patch("/v1/departments/", json={}).json()
        assert [d["code"] for d in own["data"]] == ["CARD"]

        everything = admin_client.patch("/v1/departments/", json={}).json()
        assert everything["pagination"]["records"] == 2

        narrowed = admin_client.patch("/v1/departments/", json={"organization_id": str(other_org_id)}).json()
        assert [d["code"] for d in narrowed["data"]] == ["NEURO"]

    def test_naming_other_tenant_in_search(self, org_admin_client, other_org_id):
        response = org_admin_client.patch("/v1/departments/", json={"organization_id": str(other_org_id)})
        assert response.status_code == 403

    def test_get_from_other_tenant_is_not_found(self, cardiology, client_for, other_org_id):
        response = client_for(Role.ORGANIZATION_ADMIN, other_org_id).get(f"/v1/departments/{cardiology['id']}")
        assert response.status_code == 404

    def test_update_clears_with_explicit_null(self, org_admin_client, cardiology):
        url = f"/v1/departments/{cardiology['id']}"
        org_admin_client.put(url, json={"description": "Heart care"})
        response = org_admin_client.put(url, json={"name": "Cardiology & Vascular"})
        assert response.json()["description"] == "Heart care"

        response = org_admin_client.put(url, json={"description": None})
        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["name"] == "Cardiology & Vascular"

    def test_name_cannot_be_cleared(self, org_admin_client, cardiology):
        response = org_admin_client.put(f"/v1/departments/{cardiology['id']}", json={"name": None})
        assert response.status_code == 422
        assert "name" in response.json()["detail"]

    def test_organization_id_is_immutable(self, org_admin_client, cardiology, other_org_id):
        response = org_admin_client.put(
            f"/v1/departments/{cardiology['id']}", json={"organization_id": str(other_org_id)}
        )
        assert response.status_code == 422

    def test_delete(self, org_admin_client, cardiology):
        url = f"/v1/departments/{cardiology['id']}"
        assert org_admin_client.delete(url).status_code == 204
        assert org_admin_client.delete(url).status_code == 404
        assert org_admin_client.get(url).json()["deleted_at"] is not None
        assert org_admin_client.patch("/v1/departments/", json={}).json()["data"] == []

    def test_department_head_cannot_write(self, client_for, default_org_id):
        response = client_for(Role.DEPARTMENT_HEAD).post(
            "/v1/departments/",
            json={"organization_id": str(default_org_id), "code": "ER", "name": "Emergency"},
        )
        assert response.status_code == 403
