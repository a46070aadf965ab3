"""Session context handed to the access layer.

The authentication collaborator resolves who is calling; everything the
RBAC core needs from that result travels in a SessionContext passed
explicitly to the code that asks permission questions.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .rbac.checker import PermissionChecker
from .rbac.roles import Role, parse_role


@dataclass(frozen=True)
class SessionContext:
    """Identity of the caller as supplied by authentication."""

    role: Optional[str] = None
    user_id: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    # Precomputed by the auth service; access decisions come from the role matrix
    permissions: Tuple[str, ...] = field(default_factory=tuple)
    is_demo: bool = False

    @classmethod
    def anonymous(cls) -> "SessionContext":
        return cls()

    @property
    def resolved_role(self) -> Optional[Role]:
        return parse_role(self.role)

    @property
    def is_authenticated(self) -> bool:
        return self.resolved_role is not None

    @property
    def checker(self) -> PermissionChecker:
        return PermissionChecker(self.resolved_role)
