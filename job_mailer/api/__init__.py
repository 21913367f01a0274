"""HTTP layer: routes, request validation and upload storage."""

from .routes import register_exception_handlers, router

__all__ = ["router", "register_exception_handlers"]
