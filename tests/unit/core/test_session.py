"""Tests for the session context."""

import dataclasses

import pytest

from erpadmin.core.rbac.roles import Role
from erpadmin.core.session import SessionContext


class TestSessionContext:

    def test_anonymous(self):
        session = SessionContext.anonymous()
        assert session.role is None
        assert session.resolved_role is None
        assert not session.is_authenticated
        assert session.checker.get_accessible_modules() == []

    def test_known_role(self):
        session = SessionContext(role="employee", user_id="42", email="e@example.com")
        assert session.resolved_role is Role.EMPLOYEE
        assert session.is_authenticated
        assert session.checker.can_perform_action("crm", "update")

    def test_unrecognised_role_is_not_authenticated(self):
        session = SessionContext(role="owner")
        assert session.role == "owner"
        assert session.resolved_role is None
        assert not session.is_authenticated
        assert not session.checker.has_permission("user:read")

    def test_precomputed_permissions_do_not_grant(self):
        """Decisions come from the role matrix, not from the carried list."""
        session = SessionContext(role="viewer", permissions=("hr:payroll",))
        assert session.permissions == ("hr:payroll",)
        assert not session.checker.has_permission("hr:payroll")

    def test_immutable(self):
        session = SessionContext(role="viewer")
        with pytest.raises(dataclasses.FrozenInstanceError):
            session.role = "admin"
