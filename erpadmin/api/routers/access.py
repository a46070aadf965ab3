"""Access query endpoints for the current session.

Clients call these to decide which menus, screens and buttons to mount.
"""

from typing import List

from fastapi import APIRouter, Depends

from erpadmin.api.deps import get_denial_formatter, get_session
from erpadmin.api.schemas.access import (
    GuardCheckRequest,
    GuardCheckResponse,
    ModuleAccess,
    SessionSummary,
)
from erpadmin.core.rbac.checker import NAVIGATION_MODULES, resolve_module
from erpadmin.core.rbac.guard import AccessGuard, DenialMessageFormatter
from erpadmin.core.rbac.roles import get_role_color, get_role_display_name
from erpadmin.core.session import SessionContext

router = APIRouter(prefix="/access", tags=["access"])


@router.get("/me", response_model=SessionSummary)
async def describe_session(session: SessionContext = Depends(get_session)):
    """Role, permissions and feature flags for the caller."""
    checker = session.checker
    return SessionSummary(
        authenticated=session.is_authenticated,
        role=session.role,
        role_name=get_role_display_name(session.role),
        role_color=get_role_color(session.role),
        user_id=session.user_id,
        email=session.email,
        is_demo=session.is_demo,
        permissions=checker.permissions,
        modules=checker.get_accessible_modules(),
        capabilities=checker.capabilities(),
    )


@router.get("/modules", response_model=List[ModuleAccess])
async def list_modules(session: SessionContext = Depends(get_session)):
    """Navigation modules the caller may open, with their allowed actions."""
    checker = session.checker
    return [
        ModuleAccess(module=module.value, actions=checker.get_module_actions(module))
        for module in NAVIGATION_MODULES
        if checker.can_access_module(module)
    ]


@router.get("/modules/{module}/actions", response_model=ModuleAccess)
async def list_module_actions(module: str, session: SessionContext = Depends(get_session)):
    """Allowed CRUD actions in one module; empty for unknown modules."""
    resolved = resolve_module(module)
    return ModuleAccess(
        module=resolved.value if resolved is not None else module,
        actions=session.checker.get_module_actions(module),
    )


@router.post("/check", response_model=GuardCheckResponse)
async def check_access(
    body: GuardCheckRequest,
    session: SessionContext = Depends(get_session),
    formatter: DenialMessageFormatter = Depends(get_denial_formatter),
):
    """Evaluate a guard specification against the caller's role."""
    guard = AccessGuard(
        permission=body.permission,
        permissions=body.permissions,
        require_all=body.require_all,
        role=body.role,
        module=body.module,
        action=body.action,
        formatter=formatter,
    )
    result = guard.check(session.role)
    if result.granted:
        return GuardCheckResponse(outcome=result.outcome.value, granted=True)

    notice = guard.denial_notice(result)
    return GuardCheckResponse(
        outcome=result.outcome.value,
        granted=False,
        requirement=result.requirement.value,
        title=notice.title,
        message=notice.message,
    )
