"""Permission catalog for the ERP admin console.

Defines every module namespace, the canonical CRUD actions and the closed
set of permission tokens the role matrix is built from.

Permission string format: "module:verb"
Examples:
  - accounting:read
  - procurement:approve
  - user:manage_roles
  - settings:security
"""

from enum import Enum
from typing import Optional, Tuple, Union


class Module(str, Enum):
    """Business-domain namespaces that group related permissions."""

    USER = "user"
    COMPANY = "company"
    ACCOUNTING = "accounting"
    INVENTORY = "inventory"
    CRM = "crm"
    HR = "hr"
    MANUFACTURING = "manufacturing"
    PROCUREMENT = "procurement"
    ANALYTICS = "analytics"
    REPORTS = "reports"
    SETTINGS = "settings"


class Action(str, Enum):
    """Canonical CRUD actions used by module action queries."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


# Fixed order used wherever actions are listed
CRUD_ACTIONS: Tuple[Action, ...] = (
    Action.CREATE,
    Action.READ,
    Action.UPDATE,
    Action.DELETE,
)


class Permission(str, Enum):
    """Every capability token known to the system."""

    # User management
    USER_CREATE = "user:create"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"
    USER_MANAGE_ROLES = "user:manage_roles"

    # Company / tenant management
    COMPANY_CREATE = "company:create"
    COMPANY_READ = "company:read"
    COMPANY_UPDATE = "company:update"
    COMPANY_DELETE = "company:delete"
    COMPANY_SETTINGS = "company:settings"

    # Accounting
    ACCOUNTING_READ = "accounting:read"
    ACCOUNTING_CREATE = "accounting:create"
    ACCOUNTING_UPDATE = "accounting:update"
    ACCOUNTING_DELETE = "accounting:delete"
    ACCOUNTING_REPORTS = "accounting:reports"
    ACCOUNTING_APPROVE = "accounting:approve"

    # Inventory
    INVENTORY_READ = "inventory:read"
    INVENTORY_CREATE = "inventory:create"
    INVENTORY_UPDATE = "inventory:update"
    INVENTORY_DELETE = "inventory:delete"
    INVENTORY_REPORTS = "inventory:reports"
    INVENTORY_ADJUST = "inventory:adjust"

    # CRM
    CRM_READ = "crm:read"
    CRM_CREATE = "crm:create"
    CRM_UPDATE = "crm:update"
    CRM_DELETE = "crm:delete"
    CRM_REPORTS = "crm:reports"
    CRM_MANAGE_PIPELINE = "crm:manage_pipeline"

    # HR
    HR_READ = "hr:read"
    HR_CREATE = "hr:create"
    HR_UPDATE = "hr:update"
    HR_DELETE = "hr:delete"
    HR_REPORTS = "hr:reports"
    HR_PAYROLL = "hr:payroll"

    # Manufacturing
    MANUFACTURING_READ = "manufacturing:read"
    MANUFACTURING_CREATE = "manufacturing:create"
    MANUFACTURING_UPDATE = "manufacturing:update"
    MANUFACTURING_DELETE = "manufacturing:delete"
    MANUFACTURING_REPORTS = "manufacturing:reports"
    MANUFACTURING_CONTROL = "manufacturing:control"

    # Procurement
    PROCUREMENT_READ = "procurement:read"
    PROCUREMENT_CREATE = "procurement:create"
    PROCUREMENT_UPDATE = "procurement:update"
    PROCUREMENT_DELETE = "procurement:delete"
    PROCUREMENT_REPORTS = "procurement:reports"
    PROCUREMENT_APPROVE = "procurement:approve"

    # Analytics and reports
    ANALYTICS_READ = "analytics:read"
    ANALYTICS_ADVANCED = "analytics:advanced"
    REPORTS_READ = "reports:read"
    REPORTS_CREATE = "reports:create"
    REPORTS_EXPORT = "reports:export"

    # System settings
    SETTINGS_READ = "settings:read"
    SETTINGS_UPDATE = "settings:update"
    SETTINGS_SYSTEM = "settings:system"
    SETTINGS_SECURITY = "settings:security"

    def __str__(self) -> str:
        return self.value

    @property
    def module(self) -> Module:
        """Namespace part of the token."""
        return Module(self.value.split(":")[0])

    @property
    def verb(self) -> str:
        """Verb part of the token."""
        return self.value.split(":")[1]

    @classmethod
    def from_string(cls, perm_str: str) -> "Permission":
        """Parse a permission string like 'crm:read'.

        Raises:
            ValueError: If the string is malformed or not in the catalog
        """
        parts = perm_str.split(":")
        if len(parts) != 2:
            raise ValueError(f"Invalid permission format: {perm_str}")
        try:
            return cls(perm_str)
        except ValueError:
            raise ValueError(f"Unknown permission: {perm_str}") from None


PermissionLike = Union[Permission, str]


def parse_permission(value: Optional[PermissionLike]) -> Optional[Permission]:
    """Coerce a permission or token string, returning None if unrecognised."""
    if isinstance(value, Permission):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Permission(value)
    except ValueError:
        return None


def is_valid_permission(perm_str: str) -> bool:
    """Check if a permission string is in the catalog."""
    return parse_permission(perm_str) is not None


def get_permissions_for_module(module: Module) -> list[str]:
    """Get all permission strings in a module namespace, in catalog order."""
    return [p.value for p in Permission if p.module == module]


def get_all_permissions() -> list[str]:
    """Get all permission strings, in catalog order."""
    return [p.value for p in Permission]
