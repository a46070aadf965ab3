"""Schemas for access queries and role catalog responses."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field


class SessionSummary(BaseModel):
    """What the current session may see, for building menus and toolbars."""
    authenticated: bool
    role: Optional[str] = None
    role_name: str = ""
    role_color: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    is_demo: bool = False
    permissions: List[str] = Field(default_factory=list)
    modules: List[str] = Field(default_factory=list)
    capabilities: Dict[str, bool] = Field(default_factory=dict)


class ModuleAccess(BaseModel):
    module: str
    actions: List[str] = Field(default_factory=list)


class GuardCheckRequest(BaseModel):
    """Access requirements to evaluate; omitted fields are not checked."""
    permission: Optional[str] = None
    permissions: Optional[List[str]] = None
    require_all: bool = False
    role: Optional[str] = None
    module: Optional[str] = None
    action: Optional[str] = None


class GuardCheckResponse(BaseModel):
    outcome: str
    granted: bool
    requirement: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None


class RoleResponse(BaseModel):
    key: str
    name: str
    description: str
    color: str
    rank: int
    permissions: List[str]


class PermissionInfo(BaseModel):
    permission: str
    module: str
    verb: str
