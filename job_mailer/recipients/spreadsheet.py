"""Spreadsheet decoding: first sheet of an Excel workbook as a list of rows."""

from pathlib import Path
from typing import Any, List, Union

import pandas as pd

from job_mailer.domain.exceptions import SpreadsheetReadError
from job_mailer.logging import get_logger

logger = get_logger(__name__, component="spreadsheet")

SUPPORTED_EXTENSIONS = frozenset({".xlsx", ".xls"})

# pandas picks these itself for paths; spelled out so a mislabelled upload
# fails with a clear engine error instead of a guess.
ENGINES = {".xlsx": "openpyxl", ".xls": "xlrd"}


def is_supported_spreadsheet(filename: str) -> bool:
    """Check the extension, case-insensitively, against the accepted formats."""
    return Path(filename).suffix.lower() in SUPPORTED_EXTENSIONS


def read_first_sheet(path: Union[str, Path]) -> List[List[Any]]:
    """Read every row of the workbook's first sheet.

    The header row is returned as row 0 like any other row; empty cells are
    None.

    Raises:
        SpreadsheetReadError: If the file cannot be decoded
    """
    path = Path(path)
    try:
        frame = pd.read_excel(
            path,
            sheet_name=0,
            header=None,
            dtype=object,
            # Only truly empty cells are missing; "N/A", "None" etc. stay text
            keep_default_na=False,
            na_values=[""],
            engine=ENGINES.get(path.suffix.lower()),
        )
    except Exception as e:
        raise SpreadsheetReadError(f"Unable to read spreadsheet: {e}") from e

    frame = frame.astype(object).where(pd.notna(frame), None)
    rows = frame.values.tolist()

    logger.debug(
        f"Parsed {len(rows)} rows from {path.name}",
        extra={"event": "spreadsheet.parsed", "row_count": len(rows)},
    )
    return rows
