from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from erpadmin import __version__
from erpadmin.core.config import get_settings
from erpadmin.core.logger import configure_logging
from erpadmin.api.routers import access, health, roles
from erpadmin.api.middleware.access_log import AccessLogMiddleware

settings = get_settings()
logger = configure_logging(settings)

app = FastAPI(
    title=settings.app_name,
    description="Role-based access control for the ERP admin console",
    version=__version__,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Access log middleware - one line per API request
app.add_middleware(AccessLogMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(access.router, prefix="/api")
app.include_router(roles.router, prefix="/api")

if settings.demo_mode:
    logger.warning("Demo mode enabled: unauthenticated requests act as %s", settings.demo_role)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": __version__,
        "docs": "/docs" if settings.debug else None,
    }
