"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .health_controller import router as health_router
from .root_controller import router as root_router

__all__ = ["health_router", "root_router"]
