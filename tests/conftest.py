"""Shared fixtures: settings, job payloads, generated workbooks, fake transports."""

import json
from pathlib import Path
from typing import Any, Optional, Sequence

import pytest
from openpyxl import Workbook

from job_mailer.config.environment import EnvironmentConfig
from job_mailer.domain.models import JobPosting
from tests.helpers import FakeSMTPClient


@pytest.fixture
def env_config(tmp_path):
    """Environment configuration pointing uploads at a temp directory."""
    return EnvironmentConfig(
        smtp_user="jobs@careervalore.com",
        smtp_pass="app-password",
        smtp_host="smtp.test.com",
        smtp_port=587,
        smtp_sender_name="Careervalore",
        allowed_origin="https://frontend.example.com",
        upload_dir=tmp_path / "uploads",
        apply_base_url="https://jobs.example.com/",
    )


@pytest.fixture
def job_data():
    """Job payload as the front end sends it."""
    return {
        "_id": "665f1c2ab4d0",
        "title": "Eng",
        "company": "Acme",
        "location": "Remote",
        "salary": "$120k",
        "applicationDeadline": "2025-12-31T00:00:00.000Z",
        "description": ["Build APIs.", "Own services end to end."],
        "requirements": ["3+ years of Python", "SQL"],
        "rolesAndResponsibilities": ["Design features", "Review code"],
        "aboutCompany": "Acme makes everything.",
    }


@pytest.fixture
def job(job_data):
    return JobPosting.model_validate(job_data)


@pytest.fixture
def job_json(job_data):
    return json.dumps(job_data)


@pytest.fixture
def fake_smtp():
    return FakeSMTPClient()


def write_workbook(path: Path, rows: Sequence[Sequence[Optional[Any]]]) -> Path:
    """Write ``rows`` (header first) to the first sheet of a new .xlsx file."""
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)
    return path


@pytest.fixture
def make_workbook(tmp_path):
    """Factory fixture: make_workbook(rows, name="contacts.xlsx") -> Path."""

    def _make(rows, name="contacts.xlsx"):
        return write_workbook(tmp_path / name, rows)

    return _make
