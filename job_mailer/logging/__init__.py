"""Structured logging for the job mailer: component loggers and context."""

import logging
from typing import Optional

from .config import configure_logging
from .context import log_context, new_request_id


class ComponentLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges its component field into per-call extras."""

    def process(self, msg, kwargs):
        # Call-site extras take precedence over the adapter's defaults
        kwargs["extra"] = {**self.extra, **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, component: Optional[str] = None):
    """Get a logger that tags every record with ``component``.

    Example:
        >>> logger = get_logger(__name__, component="api")
        >>> logger.info("Request received", extra={"event": "request.received"})
    """
    logger = logging.getLogger(name)

    if component:
        return ComponentLoggerAdapter(logger, {"component": component})

    return logger


__all__ = [
    "ComponentLoggerAdapter",
    "configure_logging",
    "get_logger",
    "log_context",
    "new_request_id",
]
