"""Test helper utilities for Job Mailer tests."""

from .fake_smtp import FakeSMTPClient

__all__ = ["FakeSMTPClient"]
