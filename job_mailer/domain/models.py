"""Core domain models for job postings, recipients and dispatch outcomes.

This module defines the data structures used throughout the application:
- JobPosting: the job opening announced to every recipient
- ColumnIndex: where the email and name columns sit in the uploaded sheet
- Recipient: one row-derived (email, name) pair
- DispatchResult: the per-recipient outcome reported back to the caller
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from job_mailer.utils.timestamps import ensure_utc, parse_iso_datetime

STATUS_SUCCESS = "success"
STATUS_FAILED = "failed"


def _stringify(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class JobPosting(BaseModel):
    """Job opening submitted alongside the spreadsheet.

    Field names follow the front end's JSON keys (camelCase aliases); the
    legacy ``_id`` key is accepted for ``id``. Only ``title`` is required,
    everything else renders as empty when omitted. Instances are frozen for
    the lifetime of the request.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={"example": {
            "id": "665f1c2ab4d0",
            "title": "Backend Engineer",
            "company": "Acme",
            "location": "Remote",
            "salary": "$120k - $150k",
            "applicationDeadline": "2025-12-31",
            "description": ["Build APIs.", "Own services end to end."],
            "requirements": ["3+ years of Python"],
            "rolesAndResponsibilities": ["Design and ship features"],
            "aboutCompany": "Acme makes everything.",
        }},
    )

    title: str = Field(..., description="Job title")
    company: str = Field("", description="Hiring company")
    location: str = Field("", description="Job location")
    salary: str = Field("", description="Free-form salary text")
    application_deadline: Optional[datetime] = Field(
        None, alias="applicationDeadline", description="Last day to apply (UTC)"
    )
    description: List[str] = Field(default_factory=list, description="Description paragraphs")
    requirements: List[str] = Field(default_factory=list)
    roles_and_responsibilities: List[str] = Field(
        default_factory=list, alias="rolesAndResponsibilities"
    )
    about_company: str = Field("", alias="aboutCompany")
    id: str = Field(
        "",
        validation_alias=AliasChoices("id", "_id"),
        description="Posting identifier used to build the apply link",
    )

    @field_validator("title", mode="before")
    @classmethod
    def require_title(cls, v: Any) -> str:
        """Title must be present and non-blank."""
        if v is None:
            raise ValueError("title is required")
        title = _stringify(v).strip()
        if not title:
            raise ValueError("title cannot be empty or whitespace-only")
        return title

    @field_validator("company", "location", "salary", "about_company", "id", mode="before")
    @classmethod
    def coerce_text(cls, v: Any) -> str:
        """Accept numbers (salary, numeric ids) and nulls as text."""
        if v is None:
            return ""
        return _stringify(v).strip()

    @field_validator("description", "requirements", "roles_and_responsibilities", mode="before")
    @classmethod
    def coerce_lines(cls, v: Any) -> List[str]:
        """Accept a single string as a one-line list; drop null entries."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        if isinstance(v, (list, tuple)):
            return [_stringify(item) for item in v if item is not None]
        raise ValueError("must be a list of strings")

    @field_validator("application_deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v: Any) -> Optional[datetime]:
        """Parse ISO strings, treating blanks as 'no deadline'."""
        if v is None:
            return None
        if isinstance(v, str):
            if not v.strip():
                return None
            parsed = parse_iso_datetime(v)
            if parsed is None:
                raise ValueError(f"unrecognised date: {v!r}")
            return parsed
        return v

    @field_validator("application_deadline")
    @classmethod
    def deadline_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)


@dataclass(frozen=True)
class ColumnIndex:
    """Zero-based positions of the recognised columns in the header row."""

    email: int
    name: Optional[int] = None


@dataclass(frozen=True)
class Recipient:
    """A spreadsheet row reduced to the fields the mailer needs.

    ``email`` is None when the row's email cell was empty; such rows are kept
    so the response accounts for every row.
    """

    email: Optional[str]
    name: Optional[str] = None


@dataclass
class DispatchResult:
    """Outcome of attempting to notify one recipient.

    Attributes:
        email: Recipient address, or "unknown" when the row had none
        status: "success" or "failed"
        error: Failure reason, None on success
    """

    email: str
    status: str
    error: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == STATUS_SUCCESS

    def to_dict(self) -> Dict[str, str]:
        """JSON shape of one entry in the response's ``results`` array."""
        payload = {"email": self.email, "status": self.status}
        if self.error is not None:
            payload["error"] = self.error
        return payload
