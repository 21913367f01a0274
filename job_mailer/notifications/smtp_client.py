"""SMTP client wrapper for email delivery.

This module provides a thin wrapper around Python's smtplib with support
for TLS/SSL, authentication, and proper connection lifecycle management.
Every send opens its own connection, so one client may be used from many
worker threads at once.
"""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, Optional

from job_mailer.config.environment import EnvironmentConfig

from .models import SMTPDeliveryError

logger = logging.getLogger(__name__)


class SMTPClient:
    """Wrapper around smtplib for sending email messages.

    Handles connection lifecycle, TLS/SSL negotiation and authentication.
    Designed to be easily mockable for testing.
    """

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        """Initialize SMTP client with optional factory injection.

        Args:
            smtp_factory: Factory function for creating SMTP instances (for mocking)
            smtp_ssl_factory: Factory function for creating SMTP_SSL instances (for mocking)
        """
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(self, message: EmailMessage, env_config: EnvironmentConfig) -> None:
        """Send an email message via SMTP.

        Port 465 uses implicit TLS; any other port upgrades with STARTTLS
        when ``env_config.smtp_use_tls`` is set. ``env_config.smtp_timeout``
        bounds every blocking socket operation.

        Raises:
            SMTPDeliveryError: If message delivery fails for any reason
        """
        smtp = None
        host = env_config.smtp_host
        port = env_config.smtp_port
        timeout = env_config.smtp_timeout
        try:
            if port == 465:
                logger.debug(f"Connecting to {host}:{port} with implicit TLS")
                context = ssl.create_default_context()
                smtp = self.smtp_ssl_factory(host, port, timeout=timeout, context=context)
            else:
                logger.debug(f"Connecting to {host}:{port}")
                smtp = self.smtp_factory(host, port, timeout=timeout)

                if env_config.smtp_use_tls:
                    logger.debug("Upgrading connection with STARTTLS")
                    smtp.starttls(context=ssl.create_default_context())

            if env_config.smtp_user and env_config.smtp_pass:
                smtp.login(env_config.smtp_user, env_config.smtp_pass)
            else:
                logger.debug("No authentication credentials provided, proceeding without auth")

            smtp.send_message(message)
            logger.debug(f"Message sent successfully to {message['To']}")

        except smtplib.SMTPException as e:
            raise SMTPDeliveryError(f"SMTP error during message delivery: {e}") from e
        except OSError as e:
            # Includes socket timeouts and refused connections
            raise SMTPDeliveryError(f"Network error during SMTP connection: {e}") from e
        except Exception as e:
            raise SMTPDeliveryError(f"Unexpected error during SMTP delivery: {e}") from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except Exception as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def build_sender_address(env_config: EnvironmentConfig) -> str:
    """Build the 'From' address, e.g. ``Careervalore <jobs@example.com>``."""
    return f"{env_config.smtp_sender_name} <{env_config.smtp_user}>"


def build_message(
    sender: str,
    recipient: str,
    subject: str,
    html_body: str,
    text_body: str,
) -> EmailMessage:
    """Assemble a multipart/alternative message with text and HTML parts."""
    message = EmailMessage()
    message["Subject"] = subject
    message["From"] = sender
    message["To"] = recipient
    message.set_content(text_body)
    message.add_alternative(html_body, subtype="html")
    return message
