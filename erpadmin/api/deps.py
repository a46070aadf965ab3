from typing import Optional, Sequence

from fastapi import Depends, HTTPException, Request, status

from erpadmin.core.config import Settings, get_settings
from erpadmin.core.rbac.guard import (
    AccessGuard,
    DenialMessageFormatter,
    Requirement,
    get_formatter,
)
from erpadmin.core.rbac.permissions import PermissionLike
from erpadmin.core.rbac.roles import RoleLike
from erpadmin.core.session import SessionContext


def _split_header(value: Optional[str]) -> tuple:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def get_session(request: Request, settings: Settings = Depends(get_settings)) -> SessionContext:
    """Build the caller's session from identity headers set by the auth proxy.

    Falls back to a demo session when demo mode is on, otherwise anonymous.
    """
    role = (request.headers.get(settings.role_header) or "").strip()

    if role:
        session = SessionContext(
            role=role,
            user_id=request.headers.get(settings.user_id_header),
            email=request.headers.get(settings.email_header),
            permissions=_split_header(request.headers.get(settings.permissions_header)),
        )
    elif settings.demo_mode:
        session = SessionContext(role=settings.demo_role, is_demo=True)
    else:
        session = SessionContext.anonymous()

    request.state.session = session
    return session


def get_denial_formatter(settings: Settings = Depends(get_settings)) -> DenialMessageFormatter:
    return get_formatter(settings.denial_messages)


class RequireAccess:
    """
    FastAPI dependency that protects a route with an AccessGuard.

    Unauthenticated callers get 401, denied callers get 403 with the
    configured denial message. Returns the session on success.

    Usage:
        @router.delete("/entries/{id}")
        async def delete_entry(
            id: int,
            session: SessionContext = Depends(RequireAccess(module="accounting", action="delete")),
        ):
            ...
    """

    def __init__(
        self,
        *,
        permission: Optional[PermissionLike] = None,
        permissions: Optional[Sequence[PermissionLike]] = None,
        require_all: bool = False,
        role: Optional[RoleLike] = None,
        module: Optional[str] = None,
        action: Optional[str] = None,
    ):
        self.guard = AccessGuard(
            permission=permission,
            permissions=permissions,
            require_all=require_all,
            role=role,
            module=module,
            action=action,
        )

    def __call__(
        self,
        session: SessionContext = Depends(get_session),
        formatter: DenialMessageFormatter = Depends(get_denial_formatter),
    ) -> SessionContext:
        result = self.guard.check(session.role)
        if result.granted:
            return session

        notice = formatter.format(result)
        if result.requirement is Requirement.AUTHENTICATION:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=notice.message,
                headers={"WWW-Authenticate": "Bearer"},
            )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=notice.message,
        )


def require_authenticated() -> RequireAccess:
    return RequireAccess()


def require_role(role: RoleLike) -> RequireAccess:
    return RequireAccess(role=role)


def require_permission(*permissions: PermissionLike, require_all: bool = False) -> RequireAccess:
    """Require one permission, or any (or all) of several."""
    if len(permissions) == 1:
        return RequireAccess(permission=permissions[0])
    return RequireAccess(permissions=permissions, require_all=require_all)


def require_module(module: str) -> RequireAccess:
    return RequireAccess(module=module)


def require_module_action(module: str, action: str) -> RequireAccess:
    return RequireAccess(module=module, action=action)
