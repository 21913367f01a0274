"""Request validation: the upload gate and the job payload parser.

Both run before the spreadsheet is decoded, so a malformed request is
rejected without any parsing or sending.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from job_mailer.domain.exceptions import (
    MalformedJobJSONError,
    MissingFileError,
    MissingJobDataError,
    MissingRequiredFieldError,
    UnsupportedFileTypeError,
)
from job_mailer.domain.models import JobPosting
from job_mailer.recipients.spreadsheet import SUPPORTED_EXTENSIONS, is_supported_spreadsheet

REQUIRED_JOB_FIELDS = ("title",)


def check_upload(upload: Any) -> str:
    """Ensure a spreadsheet was attached and has an accepted extension.

    Args:
        upload: The multipart file part (anything with a ``filename``), or None

    Returns:
        The client-supplied filename

    Raises:
        MissingFileError: If no file part (or an unnamed one) was sent
        UnsupportedFileTypeError: If the extension is not .xlsx or .xls
    """
    filename = getattr(upload, "filename", None) if upload is not None else None
    if not filename:
        raise MissingFileError("No file uploaded")

    if not is_supported_spreadsheet(filename):
        accepted = ", ".join(sorted(SUPPORTED_EXTENSIONS))
        raise UnsupportedFileTypeError(f"Only Excel files are allowed ({accepted})")

    return filename


def parse_job_payload(raw: Optional[str]) -> JobPosting:
    """Parse the JSON-encoded ``job`` form field into a JobPosting.

    Raises:
        MissingJobDataError: If the field is absent or blank
        MalformedJobJSONError: If it is not a JSON object of the right shape
        MissingRequiredFieldError: If ``title`` is missing or blank
    """
    if raw is None or not raw.strip():
        raise MissingJobDataError("Job post data is required in request body")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedJobJSONError(f"Invalid job post JSON in request body: {e}") from e

    if not isinstance(data, dict):
        raise MalformedJobJSONError(
            f"Invalid job post JSON in request body: expected an object, got {type(data).__name__}"
        )

    try:
        return JobPosting.model_validate(data)
    except ValidationError as e:
        errors = e.errors()
        if any(err["loc"] and err["loc"][0] in REQUIRED_JOB_FIELDS for err in errors):
            raise MissingRequiredFieldError("Missing required job fields in request body") from e

        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in errors
        )
        raise MalformedJobJSONError(f"Invalid job post fields in request body: {details}") from e
