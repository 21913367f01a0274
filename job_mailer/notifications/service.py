"""Notification dispatch: one email per recipient, sent concurrently.

This module provides the NotificationDispatcher class that orchestrates
the notification pipeline for a batch of recipients: email syntax gating,
template rendering, message assembly and SMTP delivery. Each recipient gets
its own asyncio task; the blocking SMTP conversation runs in a worker thread.
Failures are captured per recipient and never abort the batch.
"""

import asyncio
import logging
import re
from typing import List, Optional, Sequence

from job_mailer.config.environment import EnvironmentConfig
from job_mailer.domain.models import (
    STATUS_FAILED,
    STATUS_SUCCESS,
    DispatchResult,
    JobPosting,
    Recipient,
)
from job_mailer.logging import get_logger
from job_mailer.logging.context import log_context

from .models import NotificationError
from .smtp_client import SMTPClient, build_message, build_sender_address
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

INVALID_EMAIL_ERROR = "Invalid or missing email"
UNKNOWN_EMAIL = "unknown"


def is_valid_email(email: Optional[str]) -> bool:
    """Syntax gate: ``local@domain.tld`` with no whitespace or extra '@'."""
    return bool(email) and EMAIL_PATTERN.match(email) is not None


class NotificationDispatcher:
    """Sends a job notification to every recipient of a batch.

    The SMTP transport and template renderer are injected so tests can
    substitute fakes; defaults are built when omitted.
    """

    def __init__(
        self,
        env_config: EnvironmentConfig,
        template_renderer: Optional[TemplateRenderer] = None,
        smtp_client: Optional[SMTPClient] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize the dispatcher.

        Args:
            env_config: SMTP settings, sender identity and apply-link base URL
            template_renderer: Template renderer instance (creates default if None)
            smtp_client: SMTP client instance (creates default if None)
            logger_instance: Logger instance (uses module logger if None)
        """
        self.env_config = env_config
        self.template_renderer = template_renderer or TemplateRenderer()
        self.smtp_client = smtp_client or SMTPClient()
        self.logger = logger_instance or logger
        self.sender = build_sender_address(env_config)

    async def dispatch(self, job: JobPosting, recipients: Sequence[Recipient]) -> List[DispatchResult]:
        """Notify every recipient concurrently.

        All sends are started before any is awaited. ``asyncio.gather``
        returns results in argument order, so the output lines up with
        ``recipients`` whatever order the sends finish in.

        Returns:
            One DispatchResult per recipient, in input order
        """
        results = await asyncio.gather(
            *(self.send_to_recipient(job, recipient) for recipient in recipients)
        )

        sent = sum(1 for r in results if r.is_success())
        failed = len(results) - sent
        self.logger.info(
            f"Notification batch complete: {sent} sent, {failed} failed (total: {len(results)})",
            extra={
                "event": "notification.batch.completed",
                "sent": sent,
                "failed": failed,
                "total": len(results),
            },
        )
        return list(results)

    async def send_to_recipient(self, job: JobPosting, recipient: Recipient) -> DispatchResult:
        """Gate, render and deliver one notification; never raises."""
        if not is_valid_email(recipient.email):
            self.logger.info(
                f"Skipping recipient with invalid or missing email: {recipient.email!r}",
                extra={"event": "notification.skip", "reason": "invalid_email"},
            )
            return DispatchResult(
                email=recipient.email or UNKNOWN_EMAIL,
                status=STATUS_FAILED,
                error=INVALID_EMAIL_ERROR,
            )

        with log_context(recipient=recipient.email):
            try:
                await asyncio.to_thread(self._deliver, job, recipient)
            except NotificationError as e:
                self.logger.warning(
                    f"Delivery to {recipient.email} failed: {e}",
                    extra={
                        "event": "notification.send.failure",
                        "error_type": type(e).__name__,
                    },
                )
                return DispatchResult(email=recipient.email, status=STATUS_FAILED, error=str(e))
            except Exception as e:
                self.logger.error(
                    f"Unexpected error notifying {recipient.email}: {e}",
                    exc_info=True,
                    extra={
                        "event": "notification.send.failure",
                        "error_type": type(e).__name__,
                    },
                )
                return DispatchResult(email=recipient.email, status=STATUS_FAILED, error=str(e))

            self.logger.info(
                f"Notification sent to {recipient.email} ({job.company} - {job.title})",
                extra={"event": "notification.send.success"},
            )
            return DispatchResult(email=recipient.email, status=STATUS_SUCCESS)

    def _deliver(self, job: JobPosting, recipient: Recipient) -> None:
        """Blocking part of a send; runs in a worker thread."""
        rendered = self.template_renderer.render_notification(
            job,
            recipient.name,
            apply_base_url=self.env_config.apply_base_url,
            sender_name=self.env_config.smtp_sender_name,
        )
        message = build_message(
            sender=self.sender,
            recipient=recipient.email,
            subject=rendered["subject"],
            html_body=rendered["html_body"],
            text_body=rendered["text_body"],
        )
        self.smtp_client.send(message, self.env_config)
