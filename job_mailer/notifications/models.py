"""Exceptions raised while rendering or delivering a notification.

None of these escape the dispatcher: each is recorded against the single
recipient it concerns.
"""


class NotificationError(Exception):
    """Base exception for notification-related errors."""


class NotificationTemplateError(NotificationError):
    """Raised when template rendering fails due to configuration or missing variables."""


class SMTPDeliveryError(NotificationError):
    """Raised when the mail transport fails to deliver a message."""
