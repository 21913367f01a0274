"""Job Mailer: email a job posting to every contact in an uploaded spreadsheet."""

__version__ = "1.0.0"
