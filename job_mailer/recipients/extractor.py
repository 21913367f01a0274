"""Turn spreadsheet rows into Recipient records."""

from typing import Any, List, Optional, Sequence

from job_mailer.domain.exceptions import EmailColumnNotFoundError, NoValidRecipientsError
from job_mailer.domain.models import ColumnIndex, Recipient
from job_mailer.logging import get_logger

from .columns import resolve_columns

logger = get_logger(__name__, component="recipients")


def cell_text(row: Sequence[Any], index: Optional[int]) -> Optional[str]:
    """Trimmed text of ``row[index]``, or None when absent or blank.

    Whole-number floats (how spreadsheets store numeric cells) lose their
    trailing ``.0``.
    """
    if index is None or index >= len(row):
        return None

    value = row[index]
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)

    text = str(value).strip()
    return text or None


def extract_recipients(rows: Sequence[Sequence[Any]], columns: ColumnIndex) -> List[Recipient]:
    """Build one Recipient per data row, preserving row order.

    Rows are never filtered out here: a row without an email still yields a
    Recipient so it can be reported as failed.

    Args:
        rows: Data rows (header excluded)
        columns: Resolved column positions

    Raises:
        NoValidRecipientsError: If there are no rows or no row has an email
    """
    recipients = [
        Recipient(email=cell_text(row, columns.email), name=cell_text(row, columns.name))
        for row in rows
    ]

    if not recipients or all(recipient.email is None for recipient in recipients):
        raise NoValidRecipientsError("No valid email addresses found in Excel file")

    return recipients


def recipients_from_table(table: Sequence[Sequence[Any]]) -> List[Recipient]:
    """Resolve columns from the header row, then extract every data row."""
    if not table:
        raise EmailColumnNotFoundError("Excel file is empty; expected a header row")

    columns = resolve_columns(table[0])
    recipients = extract_recipients(table[1:], columns)

    logger.info(
        f"Extracted {len(recipients)} recipients",
        extra={
            "event": "recipients.extracted",
            "email_column": columns.email,
            "name_column": columns.name,
            "recipient_count": len(recipients),
            "missing_email_count": sum(1 for r in recipients if r.email is None),
        },
    )
    return recipients
