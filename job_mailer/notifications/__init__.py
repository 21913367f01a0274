"""Job notification emails.

This module provides the complete notification pipeline:
- NotificationDispatcher: concurrent per-recipient fan-out with result capture
- TemplateRenderer: Jinja2-based email template rendering
- SMTPClient: SMTP wrapper with TLS/SSL support
- Payload utilities: context builders for templates
"""

from .models import (
    NotificationError,
    NotificationTemplateError,
    SMTPDeliveryError,
)
from .payloads import DEFAULT_RECIPIENT_NAME, build_apply_url, build_notification_context
from .service import INVALID_EMAIL_ERROR, NotificationDispatcher, is_valid_email
from .smtp_client import SMTPClient, build_message, build_sender_address
from .templates import TemplateRenderer

__all__ = [
    # Main service
    "NotificationDispatcher",
    "is_valid_email",
    "INVALID_EMAIL_ERROR",
    # Exceptions
    "NotificationError",
    "NotificationTemplateError",
    "SMTPDeliveryError",
    # Components
    "TemplateRenderer",
    "SMTPClient",
    # Utilities
    "DEFAULT_RECIPIENT_NAME",
    "build_apply_url",
    "build_notification_context",
    "build_message",
    "build_sender_address",
]
