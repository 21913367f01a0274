"""Template context for one job notification."""

from typing import Dict, Optional

from job_mailer.domain.models import JobPosting
from job_mailer.utils.timestamps import format_display_date, utc_now

DEFAULT_RECIPIENT_NAME = "Valued Candidate"


def build_apply_url(job: JobPosting, apply_base_url: str) -> str:
    """Apply link: the configured base URL with the posting id appended."""
    return f"{apply_base_url}{job.id}"


def build_notification_context(
    job: JobPosting,
    recipient_name: Optional[str],
    apply_base_url: str,
    sender_name: str = "Careervalore",
) -> Dict:
    """Build the template context for one recipient.

    Args:
        job: The posting being announced
        recipient_name: Name from the sheet, or None
        apply_base_url: Prefix of the apply link
        sender_name: Brand shown in the footer

    Returns:
        Dictionary with every key the subject, HTML and text templates use:
        - recipient_name: greeting name ("Valued Candidate" when unknown)
        - title, company, location, salary, about_company: posting text
        - deadline: human-readable deadline or "Not specified"
        - description, requirements, responsibilities: lists of lines
        - apply_url: absolute apply link
        - sender_name, year: footer fields
    """
    return {
        "recipient_name": recipient_name or DEFAULT_RECIPIENT_NAME,
        "title": job.title,
        "company": job.company,
        "location": job.location,
        "salary": job.salary,
        "deadline": format_display_date(job.application_deadline),
        "description": list(job.description),
        "requirements": list(job.requirements),
        "responsibilities": list(job.roles_and_responsibilities),
        "about_company": job.about_company,
        "apply_url": build_apply_url(job, apply_base_url),
        "job_id": job.id,
        "sender_name": sender_name,
        "year": utc_now().year,
    }
