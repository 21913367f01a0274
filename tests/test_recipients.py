"""Unit tests for header matching and recipient extraction."""

import pytest

from job_mailer.domain.exceptions import EmailColumnNotFoundError, NoValidRecipientsError
from job_mailer.domain.models import ColumnIndex, Recipient
from job_mailer.recipients import (
    cell_text,
    extract_recipients,
    normalize_header,
    recipients_from_table,
    resolve_columns,
)


class TestResolveColumns:
    """Tests for resolve_columns."""

    def test_name_and_email(self):
        assert resolve_columns(["Name", "Email"]) == ColumnIndex(email=1, name=0)

    @pytest.mark.parametrize("header", [" E-Mail ", "EMAIL", "Email Address", "mail", "e-mail"])
    def test_email_aliases_ignore_case_and_whitespace(self, header):
        assert resolve_columns(["Company", header]).email == 1

    @pytest.mark.parametrize("header", ["Name", "FULL NAME", " Recipient Name", "First Name", "first name"])
    def test_name_aliases_ignore_case(self, header):
        assert resolve_columns([header, "Email"]).name == 0

    def test_name_column_optional(self):
        assert resolve_columns(["Email", "Phone"]) == ColumnIndex(email=0, name=None)

    def test_first_match_wins(self):
        columns = resolve_columns(["Mail", "Name", "Email", "Full Name"])

        assert columns.email == 0
        assert columns.name == 1

    def test_non_string_and_empty_headers(self):
        assert resolve_columns([None, 42, "Email"]).email == 2

    def test_missing_email_column(self):
        with pytest.raises(EmailColumnNotFoundError) as exc_info:
            resolve_columns(["Name", "Phone", "Emails"])

        assert exc_info.value.code == "EmailColumnNotFound"


def test_normalize_header():
    assert normalize_header("  Full Name ") == "full name"
    assert normalize_header(None) == ""
    assert normalize_header(3) == "3"


class TestCellText:
    """Tests for cell_text."""

    def test_trims(self):
        assert cell_text(["  alice@x.com  "], 0) == "alice@x.com"

    @pytest.mark.parametrize("row, index", [([None], 0), (["   "], 0), (["a"], 3), (["a"], None)])
    def test_missing_values(self, row, index):
        assert cell_text(row, index) is None

    def test_whole_float_loses_fraction(self):
        assert cell_text([12345.0], 0) == "12345"
        assert cell_text([1.5], 0) == "1.5"


class TestExtractRecipients:
    """Tests for extract_recipients."""

    def test_one_recipient_per_row_in_order(self):
        rows = [["Alice", "alice@x.com"], ["Bob", None], [None, "carol@x.com"]]

        recipients = extract_recipients(rows, ColumnIndex(email=1, name=0))

        assert recipients == [
            Recipient(email="alice@x.com", name="Alice"),
            Recipient(email=None, name="Bob"),
            Recipient(email="carol@x.com", name=None),
        ]

    def test_without_name_column(self):
        recipients = extract_recipients([["Alice", "alice@x.com"]], ColumnIndex(email=1))

        assert recipients == [Recipient(email="alice@x.com", name=None)]

    def test_short_rows(self):
        recipients = extract_recipients([["alice@x.com"], []], ColumnIndex(email=0, name=2))

        assert [r.email for r in recipients] == ["alice@x.com", None]

    def test_no_rows(self):
        with pytest.raises(NoValidRecipientsError):
            extract_recipients([], ColumnIndex(email=0))

    def test_every_email_missing(self):
        with pytest.raises(NoValidRecipientsError) as exc_info:
            extract_recipients([["Alice", None], ["Bob", "  "]], ColumnIndex(email=1, name=0))

        assert exc_info.value.code == "NoValidRecipients"


class TestRecipientsFromTable:
    """Tests for recipients_from_table."""

    def test_count_matches_data_rows(self):
        table = [["Name", "Email"], ["Alice", "alice@x.com"], ["Bob", "not-an-email"], ["Eve", None]]

        assert len(recipients_from_table(table)) == 3

    def test_empty_table(self):
        with pytest.raises(EmailColumnNotFoundError):
            recipients_from_table([])

    def test_header_checked_before_rows(self):
        with pytest.raises(EmailColumnNotFoundError):
            recipients_from_table([["Name"]])

    def test_header_only(self):
        with pytest.raises(NoValidRecipientsError):
            recipients_from_table([["Name", "Email"]])
