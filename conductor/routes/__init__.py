"""API Routes"""

from .conductor import router as conductor_router
from .reminder import router as reminder_router

__all__ = ["conductor_router", "reminder_router"]
