"""Health check endpoints.

- /health: Basic health check
- /health/live: Liveness probe (is the app running?)

The service keeps no connections to check, so both probes only report
that the process is up.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from erpadmin import __version__
from erpadmin.api.schemas.common import HealthResponse

router = APIRouter(tags=["health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    return HealthResponse(status="healthy", version=__version__, timestamp=_now())


@router.get("/health/live", response_model=HealthResponse)
async def liveness_probe():
    """
    Kubernetes liveness probe.

    Must stay fast and independent of anything outside the process.
    """
    return HealthResponse(status="alive", version=__version__, timestamp=_now())
