"""Permission checking for the ERP admin console.

Every query here is a pure function of its arguments. Unrecognised roles,
permissions, modules or actions are never an error: the query answers
False (or an empty list) instead.

`users` and `user` deliberately name the same module in both the access and
the action tables: `can_access_module(role, "user")` and
`can_perform_action(role, "users", ...)` answer from the `user:*`
permissions rather than rejecting the spelling.
"""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .permissions import (
    Action,
    CRUD_ACTIONS,
    Module,
    Permission,
    PermissionLike,
    parse_permission,
)
from .roles import ROLE_PERMISSIONS, Role, RoleLike, parse_role


ModuleLike = Union[Module, str]
ActionLike = Union[Action, str]

# Alternate spellings accepted for module names coming from routes and menus
MODULE_ALIASES: Mapping[str, Module] = MappingProxyType({
    "users": Module.USER,
})

# Any one of these grants entry to the module
MODULE_ACCESS_PERMISSIONS: Mapping[Module, Tuple[Permission, ...]] = MappingProxyType({
    Module.ACCOUNTING: (Permission.ACCOUNTING_READ,),
    Module.INVENTORY: (Permission.INVENTORY_READ,),
    Module.CRM: (Permission.CRM_READ,),
    Module.HR: (Permission.HR_READ,),
    Module.MANUFACTURING: (Permission.MANUFACTURING_READ,),
    Module.PROCUREMENT: (Permission.PROCUREMENT_READ,),
    Module.ANALYTICS: (Permission.ANALYTICS_READ,),
    Module.REPORTS: (Permission.REPORTS_READ,),
    Module.SETTINGS: (Permission.SETTINGS_READ,),
    Module.USER: (Permission.USER_READ,),
})


def _crud(module: Module) -> Mapping[Action, Permission]:
    return MappingProxyType({
        action: Permission(f"{module.value}:{action.value}") for action in CRUD_ACTIONS
    })


# Modules with record-level CRUD screens
MODULE_ACTION_PERMISSIONS: Mapping[Module, Mapping[Action, Permission]] = MappingProxyType({
    Module.ACCOUNTING: _crud(Module.ACCOUNTING),
    Module.INVENTORY: _crud(Module.INVENTORY),
    Module.CRM: _crud(Module.CRM),
    Module.HR: _crud(Module.HR),
    Module.MANUFACTURING: _crud(Module.MANUFACTURING),
    Module.PROCUREMENT: _crud(Module.PROCUREMENT),
    Module.USER: _crud(Module.USER),
})

# Candidates for the navigation menu, in display order
NAVIGATION_MODULES: Tuple[Module, ...] = (
    Module.ACCOUNTING,
    Module.INVENTORY,
    Module.CRM,
    Module.HR,
    Module.MANUFACTURING,
    Module.PROCUREMENT,
    Module.ANALYTICS,
    Module.REPORTS,
)


def resolve_module(name: Optional[ModuleLike]) -> Optional[Module]:
    """Resolve a module name case-insensitively, or None if unknown."""
    if isinstance(name, Module):
        return name
    if not isinstance(name, str):
        return None
    key = name.lower()
    if key in MODULE_ALIASES:
        return MODULE_ALIASES[key]
    try:
        return Module(key)
    except ValueError:
        return None


def resolve_action(action: Optional[ActionLike]) -> Optional[Action]:
    if isinstance(action, Action):
        return action
    if not isinstance(action, str):
        return None
    try:
        return Action(action)
    except ValueError:
        return None


def action_permission(module: Module, action: Action) -> Optional[Permission]:
    """The single permission guarding an action on a module, if the module has one."""
    actions = MODULE_ACTION_PERMISSIONS.get(module)
    if actions is None:
        return None
    return actions.get(action)


def has_permission(role: Optional[RoleLike], permission: Optional[PermissionLike]) -> bool:
    """Check whether a role holds a permission."""
    resolved_role = parse_role(role)
    resolved_perm = parse_permission(permission)
    if resolved_role is None or resolved_perm is None:
        return False
    return resolved_perm in ROLE_PERMISSIONS[resolved_role]


def has_any_permission(role: Optional[RoleLike], permissions: Iterable[PermissionLike]) -> bool:
    """Check whether a role holds at least one of the permissions.

    An empty collection is never satisfied.
    """
    return any(has_permission(role, p) for p in permissions)


def has_all_permissions(role: Optional[RoleLike], permissions: Iterable[PermissionLike]) -> bool:
    """Check whether a role holds every one of the permissions.

    An empty collection is satisfied by any recognised role. A missing or
    unknown role is always denied.
    """
    resolved = parse_role(role)
    if resolved is None:
        return False
    return all(has_permission(resolved, p) for p in permissions)


def can_access_module(role: Optional[RoleLike], module: Optional[ModuleLike]) -> bool:
    """Check whether a role may open a module at all."""
    resolved = resolve_module(module)
    if resolved is None:
        return False
    required = MODULE_ACCESS_PERMISSIONS.get(resolved)
    if not required:
        return False
    return has_any_permission(role, required)


def can_perform_action(
    role: Optional[RoleLike],
    module: Optional[ModuleLike],
    action: Optional[ActionLike],
) -> bool:
    """Check whether a role may create/read/update/delete records in a module."""
    resolved_module = resolve_module(module)
    resolved_action = resolve_action(action)
    if resolved_module is None or resolved_action is None:
        return False
    permission = action_permission(resolved_module, resolved_action)
    if permission is None:
        return False
    return has_permission(role, permission)


def get_accessible_modules(role: Optional[RoleLike]) -> List[str]:
    """Navigation modules the role may open, in menu order."""
    return [m.value for m in NAVIGATION_MODULES if can_access_module(role, m)]


def get_module_actions(role: Optional[RoleLike], module: Optional[ModuleLike]) -> List[str]:
    """CRUD actions the role may perform in a module, in create/read/update/delete order."""
    return [a.value for a in CRUD_ACTIONS if can_perform_action(role, module, a)]


def get_user_permissions(role: Optional[RoleLike]) -> List[str]:
    """All permissions held by a role, sorted; empty for an unknown role."""
    resolved = parse_role(role)
    if resolved is None:
        return []
    return sorted(p.value for p in ROLE_PERMISSIONS[resolved])


class PermissionChecker:
    """Answers permission questions for a single role."""

    def __init__(self, role: Optional[RoleLike]):
        """
        Initialize with the role of the current session.

        Args:
            role: Role or role string from authentication; None for anonymous
        """
        self.role: Optional[Role] = parse_role(role)

    @property
    def permissions(self) -> List[str]:
        return get_user_permissions(self.role)

    def has_permission(self, permission: PermissionLike) -> bool:
        return has_permission(self.role, permission)

    def has_any_permission(self, permissions: Iterable[PermissionLike]) -> bool:
        return has_any_permission(self.role, permissions)

    def has_all_permissions(self, permissions: Iterable[PermissionLike]) -> bool:
        return has_all_permissions(self.role, permissions)

    def can_access_module(self, module: ModuleLike) -> bool:
        return can_access_module(self.role, module)

    def can_perform_action(self, module: ModuleLike, action: ActionLike) -> bool:
        return can_perform_action(self.role, module, action)

    def get_accessible_modules(self) -> List[str]:
        return get_accessible_modules(self.role)

    def get_module_actions(self, module: ModuleLike) -> List[str]:
        return get_module_actions(self.role, module)

    # Role predicates

    def is_super_admin(self) -> bool:
        return self.role is Role.SUPER_ADMIN

    def is_admin(self) -> bool:
        """Admin or super admin."""
        return self.role in (Role.ADMIN, Role.SUPER_ADMIN)

    def is_manager(self) -> bool:
        """Manager or any admin level."""
        return self.role is Role.MANAGER or self.is_admin()

    # Feature predicates

    def can_manage_users(self) -> bool:
        return self.has_permission(Permission.USER_MANAGE_ROLES)

    def can_access_settings(self) -> bool:
        return self.has_permission(Permission.SETTINGS_READ)

    def can_modify_settings(self) -> bool:
        return self.has_permission(Permission.SETTINGS_UPDATE)

    def can_access_system_settings(self) -> bool:
        return self.has_permission(Permission.SETTINGS_SYSTEM)

    def can_view_reports(self) -> bool:
        return self.has_permission(Permission.REPORTS_READ)

    def can_create_reports(self) -> bool:
        return self.has_permission(Permission.REPORTS_CREATE)

    def can_export_reports(self) -> bool:
        return self.has_permission(Permission.REPORTS_EXPORT)

    def can_view_analytics(self) -> bool:
        return self.has_permission(Permission.ANALYTICS_READ)

    def can_view_advanced_analytics(self) -> bool:
        return self.has_permission(Permission.ANALYTICS_ADVANCED)

    def capabilities(self) -> dict:
        """Feature predicates as a flat mapping, for clients that render menus."""
        return {
            "is_admin": self.is_admin(),
            "is_super_admin": self.is_super_admin(),
            "is_manager": self.is_manager(),
            "can_manage_users": self.can_manage_users(),
            "can_access_settings": self.can_access_settings(),
            "can_modify_settings": self.can_modify_settings(),
            "can_access_system_settings": self.can_access_system_settings(),
            "can_view_reports": self.can_view_reports(),
            "can_create_reports": self.can_create_reports(),
            "can_export_reports": self.can_export_reports(),
            "can_view_analytics": self.can_view_analytics(),
            "can_view_advanced_analytics": self.can_view_advanced_analytics(),
        }
