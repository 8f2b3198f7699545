"""FastAPI Dependencies

Provides dependency injection for the conductor service.
"""

from typing import Annotated

from fastapi import Depends

from ..services import ConductorService

# Global service instance (initialized in lifespan)
_service: ConductorService | None = None


def init_services(service: ConductorService | None) -> None:
    """Set the global service instance (called from lifespan)"""
    global _service
    _service = service


def get_conductor_service() -> ConductorService:
    """Get ConductorService instance"""
    if _service is None:
        raise RuntimeError("ConductorService not initialized")
    return _service


ConductorServiceDep = Annotated[ConductorService, Depends(get_conductor_service)]
