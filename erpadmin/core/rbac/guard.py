"""Declarative access guards.

A guard bundles one or more access requirements and decides, for a given
role, whether protected content is shown or replaced by a fallback.

Requirements are evaluated in a fixed order and the first failure wins:

1. a recognised role must be present (anonymous sessions are denied)
2. exact role match (``role``)
3. module access (``module``)
4. module action (``module`` together with ``action``)
5. single permission (``permission``)
6. permission set (``permissions``, all or any per ``require_all``)

Guards hold no state between checks.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from .checker import (
    can_access_module,
    can_perform_action,
    has_all_permissions,
    has_any_permission,
    has_permission,
)
from .permissions import Action, Permission, PermissionLike
from .roles import Role, RoleLike, parse_role

logger = logging.getLogger(__name__)


class GuardOutcome(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"


class Requirement(str, Enum):
    """Kinds of requirement a guard can fail on, in evaluation order."""

    AUTHENTICATION = "authentication"
    ROLE = "role"
    MODULE = "module"
    MODULE_ACTION = "module_action"
    PERMISSION = "permission"
    PERMISSIONS = "permissions"


@dataclass(frozen=True)
class GuardResult:
    """Outcome of checking a guard against a role."""

    outcome: GuardOutcome
    requirement: Optional[Requirement] = None
    detail: Dict[str, Any] = field(default_factory=dict)

    @property
    def granted(self) -> bool:
        return self.outcome is GuardOutcome.GRANTED

    @classmethod
    def grant(cls) -> "GuardResult":
        return cls(GuardOutcome.GRANTED)

    @classmethod
    def deny(cls, requirement: Requirement, **detail: Any) -> "GuardResult":
        return cls(GuardOutcome.DENIED, requirement, detail)


@dataclass(frozen=True)
class DenialNotice:
    """Default fallback content shown in place of guarded content."""

    title: str
    message: str


class DenialMessageFormatter:
    """Turns a denied GuardResult into user-facing text."""

    def format(self, result: GuardResult) -> DenialNotice:
        raise NotImplementedError


class DetailedDenialMessages(DenialMessageFormatter):
    """Names the missing role, module, action or permission.

    Helps legitimate users ask for the right access, at the cost of
    describing the permission model to whoever is denied.
    """

    def format(self, result: GuardResult) -> DenialNotice:
        detail = result.detail
        requirement = result.requirement

        if requirement is Requirement.AUTHENTICATION:
            return DenialNotice("Authentication Required", "Sign in to access this content.")
        if requirement is Requirement.ROLE:
            return DenialNotice(
                "Access Restricted",
                f"This feature requires {detail['role']} role",
            )
        if requirement is Requirement.MODULE:
            return DenialNotice(
                "Access Restricted",
                f"You don't have permission to access the {detail['module']} module.",
            )
        if requirement is Requirement.MODULE_ACTION:
            return DenialNotice(
                "Access Restricted",
                f"You don't have permission to {detail['action']} "
                f"in the {detail['module']} module.",
            )
        if requirement is Requirement.PERMISSION:
            return DenialNotice("Permission Required", detail["permission"])
        if requirement is Requirement.PERMISSIONS:
            mode = "All" if detail["require_all"] else "Any"
            return DenialNotice(
                "Multiple Permissions Required",
                f"{mode} of: {', '.join(detail['permissions'])}",
            )
        return GenericDenialMessages().format(result)


class GenericDenialMessages(DenialMessageFormatter):
    """Same message for every denial; reveals nothing about the policy."""

    def format(self, result: GuardResult) -> DenialNotice:
        if result.requirement is Requirement.AUTHENTICATION:
            return DenialNotice("Authentication Required", "Sign in to access this content.")
        return DenialNotice(
            "Access Restricted",
            "You don't have permission to view this content.",
        )


DENIAL_FORMATTERS = {
    "detailed": DetailedDenialMessages,
    "generic": GenericDenialMessages,
}


def get_formatter(name: str) -> DenialMessageFormatter:
    """Get a denial message formatter by its configuration name.

    Raises:
        ValueError: If no formatter has that name
    """
    try:
        return DENIAL_FORMATTERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown denial message style: {name}. "
            f"Must be one of: {', '.join(DENIAL_FORMATTERS)}"
        ) from None


def _token(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


@dataclass(frozen=True)
class AccessGuard:
    """One set of access requirements around a unit of content.

    Usage:
        guard = AccessGuard(module="accounting", action="delete", show_fallback=False)
        button = guard.render(session.role, delete_button)
    """

    permission: Optional[PermissionLike] = None
    permissions: Optional[Sequence[PermissionLike]] = None
    require_all: bool = False
    role: Optional[RoleLike] = None
    module: Optional[str] = None
    action: Optional[str] = None
    fallback: Any = None
    show_fallback: bool = True
    formatter: DenialMessageFormatter = field(
        default_factory=DetailedDenialMessages, compare=False, repr=False
    )

    def __post_init__(self):
        if isinstance(self.permissions, str):
            # A single token, not a sequence of characters
            object.__setattr__(self, "permissions", (self.permissions,))
        elif self.permissions is not None:
            object.__setattr__(self, "permissions", tuple(self.permissions))

    def check(self, role: Optional[RoleLike]) -> GuardResult:
        """Evaluate the requirements against a role, stopping at the first failure."""
        current = parse_role(role)

        if current is None:
            return GuardResult.deny(Requirement.AUTHENTICATION)

        if self.role is not None and parse_role(self.role) is not current:
            return GuardResult.deny(Requirement.ROLE, role=_token(self.role))

        if self.module and not can_access_module(current, self.module):
            return GuardResult.deny(Requirement.MODULE, module=_token(self.module))

        if self.module and self.action and not can_perform_action(current, self.module, self.action):
            return GuardResult.deny(
                Requirement.MODULE_ACTION,
                module=_token(self.module),
                action=_token(self.action),
            )

        if self.permission and not has_permission(current, self.permission):
            return GuardResult.deny(Requirement.PERMISSION, permission=_token(self.permission))

        if self.permissions:
            if self.require_all:
                allowed = has_all_permissions(current, self.permissions)
            else:
                allowed = has_any_permission(current, self.permissions)
            if not allowed:
                return GuardResult.deny(
                    Requirement.PERMISSIONS,
                    permissions=[_token(p) for p in self.permissions],
                    require_all=self.require_all,
                )

        return GuardResult.grant()

    def allows(self, role: Optional[RoleLike]) -> bool:
        return self.check(role).granted

    def denial_notice(self, result: GuardResult) -> DenialNotice:
        return self.formatter.format(result)

    def render(self, role: Optional[RoleLike], content: Any) -> Any:
        """Return the content if granted, otherwise the fallback (or None).

        The fallback is the caller-supplied one if given, else a
        DenialNotice from the formatter. With show_fallback=False a
        denied guard renders nothing.
        """
        result = self.check(role)
        if result.granted:
            return content

        logger.debug(
            "Guard denied role=%s requirement=%s",
            _token(role) if role is not None else None,
            result.requirement.value,
        )
        if not self.show_fallback:
            return None
        if self.fallback is not None:
            return self.fallback
        return self.denial_notice(result)


# Shorthand guards for common screens

def _shorthand(formatter: Optional[DenialMessageFormatter], **requirements: Any) -> AccessGuard:
    if formatter is None:
        return AccessGuard(**requirements)
    return AccessGuard(formatter=formatter, **requirements)


def admin_only(fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None) -> AccessGuard:
    """Exactly the admin role; super admins do not match an exact role check."""
    return _shorthand(formatter, role=Role.ADMIN, fallback=fallback)


def manager_only(fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None) -> AccessGuard:
    return _shorthand(formatter, permissions=[Permission.USER_MANAGE_ROLES], fallback=fallback)


def create_permission(
    module: str, fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None
) -> AccessGuard:
    return _shorthand(formatter, module=module, action=Action.CREATE.value, fallback=fallback)


def update_permission(
    module: str, fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None
) -> AccessGuard:
    return _shorthand(formatter, module=module, action=Action.UPDATE.value, fallback=fallback)


def delete_permission(
    module: str, fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None
) -> AccessGuard:
    return _shorthand(formatter, module=module, action=Action.DELETE.value, fallback=fallback)


def reports_permission(
    fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None
) -> AccessGuard:
    return _shorthand(formatter, permission=Permission.REPORTS_READ, fallback=fallback)


def settings_permission(
    fallback: Any = None, formatter: Optional[DenialMessageFormatter] = None
) -> AccessGuard:
    return _shorthand(formatter, permission=Permission.SETTINGS_READ, fallback=fallback)
