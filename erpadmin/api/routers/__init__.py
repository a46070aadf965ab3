"""API routers for the ERP admin service."""

from . import access
from . import health
from . import roles

__all__ = [
    "access",
    "health",
    "roles",
]
