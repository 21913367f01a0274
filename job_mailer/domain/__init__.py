"""Domain models and request errors for the job mailer."""

from .exceptions import (
    EmailColumnNotFoundError,
    MalformedJobJSONError,
    MissingFileError,
    MissingJobDataError,
    MissingRequiredFieldError,
    NoValidRecipientsError,
    RequestRejectedError,
    SpreadsheetReadError,
    UnsupportedFileTypeError,
)
from .models import (
    STATUS_FAILED,
    STATUS_SUCCESS,
    ColumnIndex,
    DispatchResult,
    JobPosting,
    Recipient,
)

__all__ = [
    "JobPosting",
    "ColumnIndex",
    "Recipient",
    "DispatchResult",
    "STATUS_SUCCESS",
    "STATUS_FAILED",
    "RequestRejectedError",
    "MissingFileError",
    "UnsupportedFileTypeError",
    "MissingJobDataError",
    "MalformedJobJSONError",
    "MissingRequiredFieldError",
    "EmailColumnNotFoundError",
    "NoValidRecipientsError",
    "SpreadsheetReadError",
]
