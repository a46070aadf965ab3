"""Tests for role definitions and the role matrix."""

import pytest

from erpadmin.core.rbac import roles as roles_module
from erpadmin.core.rbac.permissions import Permission
from erpadmin.core.rbac.roles import (
    ADMIN_PERMISSIONS,
    DEFAULT_ROLES,
    EMPLOYEE_PERMISSIONS,
    MANAGER_PERMISSIONS,
    ROLE_HIERARCHY,
    ROLE_PERMISSIONS,
    Role,
    VIEWER_PERMISSIONS,
    get_role_color,
    get_role_description,
    get_role_display_name,
    get_role_permissions,
    parse_role,
    role_rank,
    verify_role_hierarchy,
)


class TestRoleCatalog:

    def test_five_roles(self):
        assert [r.value for r in Role] == [
            "super_admin", "admin", "manager", "employee", "viewer",
        ]

    def test_hierarchy_least_to_most_privileged(self):
        assert ROLE_HIERARCHY == (
            Role.VIEWER, Role.EMPLOYEE, Role.MANAGER, Role.ADMIN, Role.SUPER_ADMIN,
        )
        assert role_rank(Role.VIEWER) == 0
        assert role_rank(Role.SUPER_ADMIN) == 4

    def test_parse_role(self):
        assert parse_role("manager") is Role.MANAGER
        assert parse_role(Role.ADMIN) is Role.ADMIN
        assert parse_role("owner") is None
        assert parse_role("") is None
        assert parse_role(None) is None


class TestMatrix:
    """Structural properties of the role matrix."""

    def test_every_role_has_a_non_empty_set(self):
        for role in Role:
            assert role in ROLE_PERMISSIONS
            assert ROLE_PERMISSIONS[role]

    def test_super_admin_is_full_catalog(self):
        assert ROLE_PERMISSIONS[Role.SUPER_ADMIN] == frozenset(Permission)

    def test_monotonic_privilege(self):
        """Each role holds everything the role below it holds."""
        for lower, higher in zip(ROLE_HIERARCHY, ROLE_HIERARCHY[1:]):
            missing = ROLE_PERMISSIONS[lower] - ROLE_PERMISSIONS[higher]
            assert not missing, f"{higher.value} lacks {sorted(missing)}"

    def test_strictly_increasing(self):
        for lower, higher in zip(ROLE_HIERARCHY, ROLE_HIERARCHY[1:]):
            assert len(ROLE_PERMISSIONS[lower]) < len(ROLE_PERMISSIONS[higher])

    def test_verify_role_hierarchy_passes(self):
        assert verify_role_hierarchy() == []

    def test_matrix_is_read_only(self):
        with pytest.raises(TypeError):
            ROLE_PERMISSIONS[Role.VIEWER] = frozenset()
        with pytest.raises(AttributeError):
            ROLE_PERMISSIONS[Role.VIEWER].add(Permission.HR_PAYROLL)

    def test_verify_detects_broken_hierarchy(self, monkeypatch):
        broken = dict(ROLE_PERMISSIONS)
        broken[Role.MANAGER] = MANAGER_PERMISSIONS - {Permission.CRM_CREATE}
        monkeypatch.setattr(roles_module, "ROLE_PERMISSIONS", broken)

        problems = verify_role_hierarchy()
        assert problems == ["manager: lacks crm:create held by employee"]

    def test_verify_detects_super_admin_drift(self, monkeypatch):
        broken = dict(ROLE_PERMISSIONS)
        broken[Role.SUPER_ADMIN] = frozenset(Permission) - {Permission.SETTINGS_SYSTEM}
        monkeypatch.setattr(roles_module, "ROLE_PERMISSIONS", broken)

        problems = verify_role_hierarchy()
        assert "super_admin: missing settings:system" in problems


class TestDefaultRoles:
    """Test the hand-written role tables."""

    def test_admin_lacks_tenant_lifecycle_and_system_settings(self):
        assert Permission.COMPANY_CREATE not in ADMIN_PERMISSIONS
        assert Permission.COMPANY_DELETE not in ADMIN_PERMISSIONS
        assert Permission.SETTINGS_SYSTEM not in ADMIN_PERMISSIONS
        assert Permission.USER_MANAGE_ROLES in ADMIN_PERMISSIONS
        assert Permission.SETTINGS_SECURITY in ADMIN_PERMISSIONS

    def test_manager_has_no_deletes(self):
        assert not any(p.verb == "delete" for p in MANAGER_PERMISSIONS)
        assert Permission.ACCOUNTING_UPDATE in MANAGER_PERMISSIONS
        assert Permission.INVENTORY_ADJUST in MANAGER_PERMISSIONS

    def test_employee_permissions(self):
        assert Permission.ACCOUNTING_CREATE in EMPLOYEE_PERMISSIONS
        assert Permission.CRM_UPDATE in EMPLOYEE_PERMISSIONS
        assert Permission.HR_UPDATE not in EMPLOYEE_PERMISSIONS
        assert Permission.ACCOUNTING_UPDATE not in EMPLOYEE_PERMISSIONS

    def test_viewer_is_read_only(self):
        assert all(p.verb == "read" for p in VIEWER_PERMISSIONS)
        assert len(VIEWER_PERMISSIONS) == 11

    def test_get_role_permissions(self):
        assert get_role_permissions("viewer") is VIEWER_PERMISSIONS
        assert get_role_permissions(Role.ADMIN) is ADMIN_PERMISSIONS

    def test_invalid_role_raises(self):
        with pytest.raises(ValueError):
            get_role_permissions("unknown_role")


class TestRoleMetadata:

    def test_every_role_has_metadata(self):
        for role in Role:
            assert {"name", "description", "color"} <= set(DEFAULT_ROLES[role])

    def test_display_names(self):
        assert get_role_display_name(Role.SUPER_ADMIN) == "Super Administrator"
        assert get_role_display_name("admin") == "Administrator"
        assert get_role_display_name("owner") == "owner"
        assert get_role_display_name(None) == ""

    def test_descriptions(self):
        assert get_role_description("viewer") == "Read-only access to view data and reports"
        assert get_role_description("owner") == "No description available"

    def test_colors(self):
        assert get_role_color("super_admin") == "#9C27B0"
        assert get_role_color("employee") == "#2196F3"
        assert get_role_color("owner") == "#757575"
