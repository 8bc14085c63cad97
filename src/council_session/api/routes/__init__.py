"""API routes module for council-session.

This module exports all API routers for registration in main.py.
"""

from council_session.api.routes.council import router as council_router
from council_session.api.routes.health import router as health_router


__all__ = [
    "council_router",
    "health_router",
]
