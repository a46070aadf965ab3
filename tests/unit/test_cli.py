"""Tests for the policy CLI."""

import pytest
import yaml

from erpadmin import __main__ as cli
from erpadmin.core.rbac import roles as roles_module
from erpadmin.core.rbac.permissions import Permission
from erpadmin.core.rbac.roles import ROLE_PERMISSIONS, Role


class TestMatrixCommand:

    def test_full_matrix(self, capsys):
        assert cli.main(["matrix"]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert list(data) == ["viewer", "employee", "manager", "admin", "super_admin"]
        assert len(data["super_admin"]) == 55
        assert data["viewer"] == sorted(data["viewer"])

    def test_single_role(self, capsys):
        assert cli.main(["matrix", "employee"]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert list(data) == ["employee"]
        assert "crm:update" in data["employee"]

    def test_unknown_role(self, capsys):
        assert cli.main(["matrix", "owner"]) == 1
        assert "Unknown role: owner" in capsys.readouterr().err


class TestCheckCommand:

    def test_granted(self, capsys):
        assert cli.main(["check", "manager", "accounting:update"]) == 0
        assert capsys.readouterr().out.strip() == "granted"

    def test_denied(self, capsys):
        assert cli.main(["check", "manager", "accounting:delete"]) == 1
        assert capsys.readouterr().out.strip() == "denied"

    def test_unknown_inputs_denied(self, capsys):
        assert cli.main(["check", "owner", "accounting:read"]) == 1
        assert cli.main(["check", "admin", "accounting:archive"]) == 1

    def test_missing_arguments(self, capsys):
        assert cli.main(["check", "admin"]) == 2
        assert "Usage" in capsys.readouterr().err


class TestVerifyCommand:

    def test_shipped_matrix_is_consistent(self, capsys):
        assert cli.main(["verify"]) == 0
        assert capsys.readouterr().out.startswith("OK: 5 roles")

    def test_reports_violations(self, capsys, monkeypatch):
        broken = dict(ROLE_PERMISSIONS)
        broken[Role.EMPLOYEE] = ROLE_PERMISSIONS[Role.EMPLOYEE] - {Permission.HR_READ}
        monkeypatch.setattr(roles_module, "ROLE_PERMISSIONS", broken)

        assert cli.main(["verify"]) == 1
        assert "employee: lacks hr:read held by viewer" in capsys.readouterr().out


class TestUsage:

    @pytest.mark.parametrize("argv", [[], ["frobnicate"], ["verify", "extra"]])
    def test_usage_errors(self, argv, capsys):
        assert cli.main(argv) == 2
        assert "Usage: python -m erpadmin" in capsys.readouterr().err
