"""Request-level error taxonomy.

Every error here rejects the whole request with HTTP 400 before any email is
sent. The ``code`` attribute is the stable, machine-readable reason.
"""


class RequestRejectedError(Exception):
    """Base class for client errors that terminate a request."""

    code = "RequestRejected"
    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MissingFileError(RequestRejectedError):
    """No spreadsheet was attached to the request."""

    code = "MissingFile"


class UnsupportedFileTypeError(RequestRejectedError):
    """The upload's extension is not an accepted spreadsheet format."""

    code = "UnsupportedFileType"


class MissingJobDataError(RequestRejectedError):
    """The job form field was absent or empty."""

    code = "MissingJobData"


class MalformedJobJSONError(RequestRejectedError):
    """The job form field was not a valid JSON job record."""

    code = "MalformedJobJSON"


class MissingRequiredFieldError(RequestRejectedError):
    """The job record lacks a required field (title)."""

    code = "MissingRequiredField"


class EmailColumnNotFoundError(RequestRejectedError):
    """No header cell matches any email alias."""

    code = "EmailColumnNotFound"


class NoValidRecipientsError(RequestRejectedError):
    """The sheet has no data rows, or none of them carries an email."""

    code = "NoValidRecipients"


class SpreadsheetReadError(Exception):
    """The uploaded file could not be decoded as a spreadsheet.

    Not a client error: it surfaces as a server error, matching how the
    service treats any other unexpected failure after the upload is accepted.
    """
