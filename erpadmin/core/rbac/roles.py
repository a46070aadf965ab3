"""Role definitions and the role -> permission matrix.

Defines the 5 standard roles, ordered least to most privileged:
1. Viewer - Read-only access to every business module
2. Employee - Day-to-day data entry
3. Manager - Module management and reporting, no destructive actions
4. Admin - Full module access plus user administration
5. Super Admin - The entire permission catalog

The matrix is built once at import time and is read-only afterwards.
"""

from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from .permissions import Permission


class Role(str, Enum):
    """Roles a session can hold."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"
    VIEWER = "viewer"

    def __str__(self) -> str:
        return self.value


RoleLike = Union[Role, str]

# Least to most privileged; each role holds every permission of the ones before it
ROLE_HIERARCHY: Tuple[Role, ...] = (
    Role.VIEWER,
    Role.EMPLOYEE,
    Role.MANAGER,
    Role.ADMIN,
    Role.SUPER_ADMIN,
)


# Super Admin: derived from the catalog so it can never fall behind it
SUPER_ADMIN_PERMISSIONS: FrozenSet[Permission] = frozenset(Permission)

# Admin: everything except tenant lifecycle and system-level settings
ADMIN_PERMISSIONS: FrozenSet[Permission] = frozenset([
    # User management
    Permission.USER_CREATE,
    Permission.USER_READ,
    Permission.USER_UPDATE,
    Permission.USER_DELETE,
    Permission.USER_MANAGE_ROLES,

    # Company management
    Permission.COMPANY_READ,
    Permission.COMPANY_UPDATE,
    Permission.COMPANY_SETTINGS,

    # All business modules
    Permission.ACCOUNTING_READ,
    Permission.ACCOUNTING_CREATE,
    Permission.ACCOUNTING_UPDATE,
    Permission.ACCOUNTING_DELETE,
    Permission.ACCOUNTING_REPORTS,
    Permission.ACCOUNTING_APPROVE,

    Permission.INVENTORY_READ,
    Permission.INVENTORY_CREATE,
    Permission.INVENTORY_UPDATE,
    Permission.INVENTORY_DELETE,
    Permission.INVENTORY_REPORTS,
    Permission.INVENTORY_ADJUST,

    Permission.CRM_READ,
    Permission.CRM_CREATE,
    Permission.CRM_UPDATE,
    Permission.CRM_DELETE,
    Permission.CRM_REPORTS,
    Permission.CRM_MANAGE_PIPELINE,

    Permission.HR_READ,
    Permission.HR_CREATE,
    Permission.HR_UPDATE,
    Permission.HR_DELETE,
    Permission.HR_REPORTS,
    Permission.HR_PAYROLL,

    Permission.MANUFACTURING_READ,
    Permission.MANUFACTURING_CREATE,
    Permission.MANUFACTURING_UPDATE,
    Permission.MANUFACTURING_DELETE,
    Permission.MANUFACTURING_REPORTS,
    Permission.MANUFACTURING_CONTROL,

    Permission.PROCUREMENT_READ,
    Permission.PROCUREMENT_CREATE,
    Permission.PROCUREMENT_UPDATE,
    Permission.PROCUREMENT_DELETE,
    Permission.PROCUREMENT_REPORTS,
    Permission.PROCUREMENT_APPROVE,

    # Analytics and reports
    Permission.ANALYTICS_READ,
    Permission.ANALYTICS_ADVANCED,
    Permission.REPORTS_READ,
    Permission.REPORTS_CREATE,
    Permission.REPORTS_EXPORT,

    # Settings
    Permission.SETTINGS_READ,
    Permission.SETTINGS_UPDATE,
    Permission.SETTINGS_SECURITY,
])

# Manager: module management without deletes on business data
MANAGER_PERMISSIONS: FrozenSet[Permission] = frozenset([
    # Limited user management
    Permission.USER_READ,
    Permission.USER_UPDATE,

    Permission.COMPANY_READ,

    Permission.ACCOUNTING_READ,
    Permission.ACCOUNTING_CREATE,
    Permission.ACCOUNTING_UPDATE,
    Permission.ACCOUNTING_REPORTS,

    Permission.INVENTORY_READ,
    Permission.INVENTORY_CREATE,
    Permission.INVENTORY_UPDATE,
    Permission.INVENTORY_REPORTS,
    Permission.INVENTORY_ADJUST,

    Permission.CRM_READ,
    Permission.CRM_CREATE,
    Permission.CRM_UPDATE,
    Permission.CRM_REPORTS,
    Permission.CRM_MANAGE_PIPELINE,

    Permission.HR_READ,
    Permission.HR_CREATE,
    Permission.HR_UPDATE,
    Permission.HR_REPORTS,

    Permission.MANUFACTURING_READ,
    Permission.MANUFACTURING_CREATE,
    Permission.MANUFACTURING_UPDATE,
    Permission.MANUFACTURING_REPORTS,

    Permission.PROCUREMENT_READ,
    Permission.PROCUREMENT_CREATE,
    Permission.PROCUREMENT_UPDATE,
    Permission.PROCUREMENT_REPORTS,

    Permission.ANALYTICS_READ,
    Permission.REPORTS_READ,
    Permission.REPORTS_CREATE,
    Permission.REPORTS_EXPORT,

    # Settings - read only
    Permission.SETTINGS_READ,
])

# Employee: daily operations
EMPLOYEE_PERMISSIONS: FrozenSet[Permission] = frozenset([
    Permission.USER_READ,
    Permission.COMPANY_READ,

    Permission.ACCOUNTING_READ,
    Permission.ACCOUNTING_CREATE,

    Permission.INVENTORY_READ,
    Permission.INVENTORY_CREATE,
    Permission.INVENTORY_UPDATE,

    Permission.CRM_READ,
    Permission.CRM_CREATE,
    Permission.CRM_UPDATE,

    Permission.HR_READ,

    Permission.MANUFACTURING_READ,
    Permission.MANUFACTURING_CREATE,

    Permission.PROCUREMENT_READ,
    Permission.PROCUREMENT_CREATE,

    Permission.ANALYTICS_READ,
    Permission.REPORTS_READ,

    Permission.SETTINGS_READ,
])

# Viewer: read-only
VIEWER_PERMISSIONS: FrozenSet[Permission] = frozenset([
    Permission.USER_READ,
    Permission.COMPANY_READ,
    Permission.ACCOUNTING_READ,
    Permission.INVENTORY_READ,
    Permission.CRM_READ,
    Permission.HR_READ,
    Permission.MANUFACTURING_READ,
    Permission.PROCUREMENT_READ,
    Permission.ANALYTICS_READ,
    Permission.REPORTS_READ,
    Permission.SETTINGS_READ,
])


ROLE_PERMISSIONS: Mapping[Role, FrozenSet[Permission]] = MappingProxyType({
    Role.SUPER_ADMIN: SUPER_ADMIN_PERMISSIONS,
    Role.ADMIN: ADMIN_PERMISSIONS,
    Role.MANAGER: MANAGER_PERMISSIONS,
    Role.EMPLOYEE: EMPLOYEE_PERMISSIONS,
    Role.VIEWER: VIEWER_PERMISSIONS,
})


# Presentation metadata for role badges and pickers
DEFAULT_ROLES: Dict[Role, dict] = {
    Role.SUPER_ADMIN: {
        "name": "Super Administrator",
        "description": "Full system access with all permissions",
        "color": "#9C27B0",
    },
    Role.ADMIN: {
        "name": "Administrator",
        "description": "Administrative access to manage users and all modules",
        "color": "#F44336",
    },
    Role.MANAGER: {
        "name": "Manager",
        "description": "Management access with approval and reporting capabilities",
        "color": "#FF9800",
    },
    Role.EMPLOYEE: {
        "name": "Employee",
        "description": "Standard access for daily operations",
        "color": "#2196F3",
    },
    Role.VIEWER: {
        "name": "Viewer",
        "description": "Read-only access to view data and reports",
        "color": "#4CAF50",
    },
}

UNKNOWN_ROLE_DESCRIPTION = "No description available"
UNKNOWN_ROLE_COLOR = "#757575"


def parse_role(value: Optional[RoleLike]) -> Optional[Role]:
    """Coerce a role or role string, returning None if unrecognised."""
    if isinstance(value, Role):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def role_rank(role: Role) -> int:
    """Position of a role in the privilege ordering (0 is least privileged)."""
    return ROLE_HIERARCHY.index(role)


def get_role_permissions(role: RoleLike) -> FrozenSet[Permission]:
    """Get the permission set for a role.

    Raises:
        ValueError: If the role is not one of the defined roles
    """
    resolved = parse_role(role)
    if resolved is None:
        raise ValueError(f"Unknown role: {role}")
    return ROLE_PERMISSIONS[resolved]


def get_role_display_name(role: Optional[RoleLike]) -> str:
    resolved = parse_role(role)
    if resolved is None:
        return str(role) if role is not None else ""
    return DEFAULT_ROLES[resolved]["name"]


def get_role_description(role: Optional[RoleLike]) -> str:
    resolved = parse_role(role)
    if resolved is None:
        return UNKNOWN_ROLE_DESCRIPTION
    return DEFAULT_ROLES[resolved]["description"]


def get_role_color(role: Optional[RoleLike]) -> str:
    resolved = parse_role(role)
    if resolved is None:
        return UNKNOWN_ROLE_COLOR
    return DEFAULT_ROLES[resolved]["color"]


def verify_role_hierarchy() -> List[str]:
    """Check the matrix against its structural rules.

    Every role must hold all permissions of the role below it in
    ROLE_HIERARCHY, and super admin must hold exactly the full catalog.

    Returns:
        Human-readable violations; empty when the matrix is sound
    """
    problems = []

    missing_roles = [r.value for r in Role if r not in ROLE_PERMISSIONS]
    for name in missing_roles:
        problems.append(f"{name}: no permission set defined")
    if missing_roles:
        return problems

    catalog = frozenset(Permission)
    if ROLE_PERMISSIONS[Role.SUPER_ADMIN] != catalog:
        absent = sorted(p.value for p in catalog - ROLE_PERMISSIONS[Role.SUPER_ADMIN])
        problems.append(f"super_admin: missing {', '.join(absent)}")

    for lower, higher in zip(ROLE_HIERARCHY, ROLE_HIERARCHY[1:]):
        dropped = ROLE_PERMISSIONS[lower] - ROLE_PERMISSIONS[higher]
        if dropped:
            names = ", ".join(sorted(p.value for p in dropped))
            problems.append(f"{higher.value}: lacks {names} held by {lower.value}")

    for role in ROLE_HIERARCHY:
        if not ROLE_PERMISSIONS[role]:
            problems.append(f"{role.value}: empty permission set")

    return problems
