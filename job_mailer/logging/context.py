"""Scoped metadata injected into every log record.

Context lives in a ContextVar, so each asyncio task (one per HTTP request,
one per recipient send) sees its own copy, and ``asyncio.to_thread`` carries
it into the worker thread that performs the blocking SMTP call.
"""

import uuid
from contextvars import ContextVar, Token
from typing import Any, Dict, Optional

LogContextVar: ContextVar[Dict[str, Any]] = ContextVar("log_context", default={})


def get_log_context() -> Dict[str, Any]:
    """Return a copy of the active context fields."""
    return LogContextVar.get().copy()


def push_log_context(**kwargs) -> Token:
    """Merge fields into the active context.

    Returns:
        Token for pop_log_context() to restore the previous state

    Example:
        >>> token = push_log_context(request_id="abc123")
        >>> pop_log_context(token)
    """
    return LogContextVar.set({**LogContextVar.get(), **kwargs})


def pop_log_context(token: Token) -> None:
    """Restore the context captured by push_log_context()."""
    LogContextVar.reset(token)


def clear_log_context() -> None:
    """Drop every context field (used by tests)."""
    LogContextVar.set({})


def new_request_id() -> str:
    """Short random identifier used to correlate one request's log lines."""
    return uuid.uuid4().hex[:12]


class log_context:
    """Context manager for scoped logging context.

    Example:
        >>> with log_context(request_id="abc123", recipient="alice@example.com"):
        ...     logger.info("Sending notification")  # includes both fields
    """

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.token: Optional[Token] = None

    def __enter__(self):
        self.token = push_log_context(**self.kwargs)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.token is not None:
            pop_log_context(self.token)
        return False
