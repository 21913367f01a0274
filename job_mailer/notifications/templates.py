"""Jinja2 rendering of the job notification email.

One notification is three templates: a single-line subject, an HTML body
and a plain-text alternative. Only the HTML body is autoescaped; job text
such as "R&D <Lead>" must reach the subject and text part unchanged.
"""

import logging
from typing import Dict, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError

from job_mailer.domain.models import JobPosting

from .models import NotificationTemplateError
from .payloads import build_notification_context

logger = logging.getLogger(__name__)


def _autoescape_html(template_name: Optional[str]) -> bool:
    return bool(template_name) and template_name.endswith(".html.j2")


class TemplateRenderer:
    """Renders a job posting into a notification for one recipient.

    Templates are loaded from ``job_mailer.notifications/email_templates``.
    StrictUndefined turns a context key the templates expect but
    ``build_notification_context`` no longer provides into a render error
    instead of a silently blank field.
    """

    def __init__(
        self,
        template_dir: str = "email_templates",
        subject_template: str = "job_notification_subject.j2",
        html_template: str = "job_notification_body.html.j2",
        text_template: str = "job_notification_body.txt.j2",
    ):
        self.subject_template_name = subject_template
        self.html_template_name = html_template
        self.text_template_name = text_template

        self.env = Environment(
            loader=PackageLoader("job_mailer.notifications", template_dir),
            autoescape=_autoescape_html,
            undefined=StrictUndefined,
        )

    def render_notification(
        self,
        job: JobPosting,
        recipient_name: Optional[str],
        apply_base_url: str,
        sender_name: str = "Careervalore",
    ) -> Dict[str, str]:
        """Render the notification announcing ``job`` to one recipient.

        Args:
            job: The posting being announced
            recipient_name: Greeting name from the sheet; None greets a
                "Valued Candidate"
            apply_base_url: Prefix of the "Apply Now" link (the job id is appended)
            sender_name: Brand shown in the footer

        Returns:
            Dict with ``subject``, ``html_body`` and ``text_body``

        Raises:
            NotificationTemplateError: If any of the three templates fails
        """
        context = build_notification_context(
            job,
            recipient_name,
            apply_base_url=apply_base_url,
            sender_name=sender_name,
        )
        return self.render(context)

    def render(self, context: Dict) -> Dict[str, str]:
        """Render the three templates from a prepared context.

        Newlines in the rendered subject are folded into spaces so a
        multi-line job title cannot produce a broken header.
        """
        try:
            subject = (
                self.env.get_template(self.subject_template_name)
                .render(context)
                .strip()
                .replace("\n", " ")
            )
            html_body = self.env.get_template(self.html_template_name).render(context)
            text_body = self.env.get_template(self.text_template_name).render(context)
        except TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e
        except Exception as e:
            error_msg = f"Unexpected error during template rendering: {e}"
            logger.error(error_msg, exc_info=True)
            raise NotificationTemplateError(error_msg) from e

        logger.debug(f"Rendered notification for job {context.get('job_id') or context.get('title')!r}")

        return {
            "subject": subject,
            "html_body": html_body,
            "text_body": text_body,
        }
