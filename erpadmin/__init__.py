"""ERP admin console: role-based access control core and API."""

__version__ = "0.1.0"
