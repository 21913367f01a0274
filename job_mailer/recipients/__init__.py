"""Recipient extraction: spreadsheet decoding, header matching, row mapping."""

from .columns import EMAIL_ALIASES, NAME_ALIASES, normalize_header, resolve_columns
from .extractor import cell_text, extract_recipients, recipients_from_table
from .spreadsheet import SUPPORTED_EXTENSIONS, is_supported_spreadsheet, read_first_sheet

__all__ = [
    "EMAIL_ALIASES",
    "NAME_ALIASES",
    "SUPPORTED_EXTENSIONS",
    "normalize_header",
    "resolve_columns",
    "cell_text",
    "extract_recipients",
    "recipients_from_table",
    "is_supported_spreadsheet",
    "read_first_sheet",
]
