"""Role catalog API endpoints.

Roles and permissions are fixed at build time, so these endpoints are
read-only views over the role matrix.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from erpadmin.api.deps import require_authenticated, require_permission
from erpadmin.api.schemas.access import ModuleAccess, PermissionInfo, RoleResponse
from erpadmin.api.schemas.common import ErrorResponse
from erpadmin.core.rbac.checker import NAVIGATION_MODULES, PermissionChecker
from erpadmin.core.rbac.permissions import Permission
from erpadmin.core.rbac.roles import (
    DEFAULT_ROLES,
    ROLE_HIERARCHY,
    ROLE_PERMISSIONS,
    Role,
    parse_role,
    role_rank,
)

router = APIRouter(prefix="/roles", tags=["roles"])


def _role_response(role: Role) -> RoleResponse:
    meta = DEFAULT_ROLES[role]
    return RoleResponse(
        key=role.value,
        name=meta["name"],
        description=meta["description"],
        color=meta["color"],
        rank=role_rank(role),
        permissions=sorted(p.value for p in ROLE_PERMISSIONS[role]),
    )


def _get_role_or_404(role_key: str) -> Role:
    role = parse_role(role_key)
    if role is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found")
    return role


@router.get(
    "",
    response_model=List[RoleResponse],
    dependencies=[Depends(require_permission(Permission.USER_READ))],
)
async def list_roles():
    """List all roles, most privileged first."""
    return [_role_response(role) for role in reversed(ROLE_HIERARCHY)]


@router.get(
    "/permissions",
    response_model=List[PermissionInfo],
    dependencies=[Depends(require_authenticated())],
)
async def list_all_permissions():
    """List the permission catalog."""
    return [
        PermissionInfo(permission=p.value, module=p.module.value, verb=p.verb)
        for p in Permission
    ]


@router.get(
    "/{role_key}",
    response_model=RoleResponse,
    responses={404: {"model": ErrorResponse}},
    dependencies=[Depends(require_permission(Permission.USER_READ))],
)
async def get_role(role_key: str):
    """Get a role with its permission set."""
    return _role_response(_get_role_or_404(role_key))


@router.get(
    "/{role_key}/modules",
    response_model=List[ModuleAccess],
    responses={404: {"model": ErrorResponse}},
    dependencies=[Depends(require_permission(Permission.USER_MANAGE_ROLES))],
)
async def get_role_modules(role_key: str):
    """Preview the navigation a role would get, for role assignment screens."""
    checker = PermissionChecker(_get_role_or_404(role_key))
    return [
        ModuleAccess(module=module.value, actions=checker.get_module_actions(module))
        for module in NAVIGATION_MODULES
        if checker.can_access_module(module)
    ]
