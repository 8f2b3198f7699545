"""Application Services"""

from .conductor_service import ConductorService

__all__ = ["ConductorService"]
