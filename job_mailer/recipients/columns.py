"""Header matching: locate the email and name columns of an uploaded sheet."""

from typing import Any, Iterable, Optional, Sequence

from job_mailer.domain.exceptions import EmailColumnNotFoundError
from job_mailer.domain.models import ColumnIndex

EMAIL_ALIASES = frozenset({"email", "e-mail", "email address", "mail"})
NAME_ALIASES = frozenset({"name", "full name", "recipient name", "first name"})


def normalize_header(cell: Any) -> str:
    """Lowercase, trimmed text of a header cell; empty cells become ''."""
    if cell is None:
        return ""
    return str(cell).strip().lower()


def find_column(headers: Sequence[str], aliases: Iterable[str]) -> Optional[int]:
    """Index of the first normalized header that is one of ``aliases``."""
    wanted = {alias.strip().lower() for alias in aliases}
    for index, header in enumerate(headers):
        if header in wanted:
            return index
    return None


def resolve_columns(header_row: Sequence[Any]) -> ColumnIndex:
    """Map a raw header row to the email (required) and name (optional) columns.

    Raises:
        EmailColumnNotFoundError: If no header names an email column
    """
    headers = [normalize_header(cell) for cell in header_row]

    email_index = find_column(headers, EMAIL_ALIASES)
    if email_index is None:
        raise EmailColumnNotFoundError(
            'Excel file must contain a column with header "email", "e-mail", '
            '"email address", or "mail"'
        )

    return ColumnIndex(email=email_index, name=find_column(headers, NAME_ALIASES))
