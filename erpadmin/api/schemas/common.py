"""Common schemas for the ERP admin API."""

from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response, as produced by HTTPException."""
    detail: str


class HealthResponse(BaseModel):
    status: str
    version: str
    timestamp: Optional[str] = None
