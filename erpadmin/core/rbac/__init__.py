"""RBAC (Role-Based Access Control) module for the ERP admin console.

This module defines the permission catalog, the role matrix, the policy
evaluator and declarative access guards.
"""

from .permissions import Permission, Module, Action, CRUD_ACTIONS
from .roles import Role, ROLE_HIERARCHY, ROLE_PERMISSIONS
from .checker import (
    PermissionChecker,
    has_permission,
    has_any_permission,
    has_all_permissions,
    can_access_module,
    can_perform_action,
    get_accessible_modules,
    get_module_actions,
)
from .guard import AccessGuard, GuardOutcome, GuardResult, Requirement

__all__ = [
    "Permission",
    "Module",
    "Action",
    "CRUD_ACTIONS",
    "Role",
    "ROLE_HIERARCHY",
    "ROLE_PERMISSIONS",
    "PermissionChecker",
    "has_permission",
    "has_any_permission",
    "has_all_permissions",
    "can_access_module",
    "can_perform_action",
    "get_accessible_modules",
    "get_module_actions",
    "AccessGuard",
    "GuardOutcome",
    "GuardResult",
    "Requirement",
]
