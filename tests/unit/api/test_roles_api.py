"""Tests for the role catalog endpoints."""

from fastapi.testclient import TestClient


class TestListRoles:

    def test_requires_authentication(self, client: TestClient):
        response = client.get("/api/roles")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["detail"] == "Sign in to access this content."

    def test_lists_most_privileged_first(self, client: TestClient, as_role):
        response = client.get("/api/roles", headers=as_role("viewer"))
        assert response.status_code == 200
        roles = response.json()
        assert [r["key"] for r in roles] == [
            "super_admin", "admin", "manager", "employee", "viewer",
        ]
        assert roles[0]["name"] == "Super Administrator"
        assert roles[0]["rank"] == 4
        assert len(roles[0]["permissions"]) == 55

    def test_unknown_role_header_is_unauthenticated(self, client: TestClient, as_role):
        assert client.get("/api/roles", headers=as_role("root")).status_code == 401


class TestGetRole:

    def test_get_role(self, client: TestClient, as_role):
        response = client.get("/api/roles/viewer", headers=as_role("employee"))
        assert response.status_code == 200
        data = response.json()
        assert data["key"] == "viewer"
        assert data["color"] == "#4CAF50"
        assert data["permissions"] == sorted(data["permissions"])
        assert "settings:read" in data["permissions"]

    def test_unknown_role_404(self, client: TestClient, as_role):
        response = client.get("/api/roles/owner", headers=as_role("admin"))
        assert response.status_code == 404
        assert response.json()["detail"] == "Role not found"


class TestRoleModules:

    def test_forbidden_without_role_management(self, client: TestClient, as_role):
        response = client.get("/api/roles/viewer/modules", headers=as_role("manager"))
        assert response.status_code == 403
        assert response.json()["detail"] == "user:manage_roles"

    def test_generic_forbidden_message(self, make_client, as_role):
        strict = make_client(denial_messages="generic")
        response = strict.get("/api/roles/viewer/modules", headers=as_role("manager"))
        assert response.status_code == 403
        assert response.json()["detail"] == "You don't have permission to view this content."

    def test_preview_role_navigation(self, client: TestClient, as_role):
        response = client.get("/api/roles/employee/modules", headers=as_role("admin"))
        assert response.status_code == 200
        modules = {m["module"]: m["actions"] for m in response.json()}
        assert modules["inventory"] == ["create", "read", "update"]
        assert modules["procurement"] == ["create", "read"]

    def test_unknown_role_404(self, client: TestClient, as_role):
        response = client.get("/api/roles/owner/modules", headers=as_role("super_admin"))
        assert response.status_code == 404


class TestPermissionCatalog:

    def test_list_permissions(self, client: TestClient, as_role):
        response = client.get("/api/roles/permissions", headers=as_role("viewer"))
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 55
        assert data[0] == {"permission": "user:create", "module": "user", "verb": "create"}
        assert {"permission": "crm:manage_pipeline", "module": "crm", "verb": "manage_pipeline"} in data

    def test_permissions_require_authentication(self, client: TestClient):
        assert client.get("/api/roles/permissions").status_code == 401
