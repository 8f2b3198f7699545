"""
Conductor Monitor FastAPI Application

REST API over the delegation monitor:
- Delegation / direct-action recording
- Stats, windowed reports and formatted status
- Alert threshold management
- Message reminders
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from .config import get_settings
from .core.exceptions import StoreError
from .logging_config import configure_logging
from .routes import conductor_router, reminder_router
from .routes.dependencies import ConductorServiceDep, init_services
from .services import ConductorService

logger = structlog.get_logger()

# Settings
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager"""
    configure_logging(settings.log_level)

    # Startup
    service = ConductorService.from_settings(settings)
    init_services(service)
    logger.info(
        "conductor_service_started",
        redis_url=settings.redis_url,
        alert_log=str(settings.alert_log_path),
    )

    yield

    # Shutdown
    init_services(None)
    await service.close()


# Create FastAPI app
app = FastAPI(
    title="Conductor Monitor",
    description="Delegation ratio monitoring and alerting for orchestrating agents",
    version=settings.service_version,
    lifespan=lifespan,
)

app.include_router(conductor_router)
app.include_router(reminder_router)


@app.get("/")
async def root():
    """Service info"""
    return {
        "service": settings.service_name,
        "version": settings.service_version,
        "docs": "/docs",
    }


@app.get("/health")
async def health(service: ConductorServiceDep):
    """Health check (pings Redis)"""
    try:
        await service.ping()
    except StoreError as e:
        return {"status": "degraded", "redis": "unavailable", "error": str(e)}
    return {"status": "healthy", "redis": "ok"}
