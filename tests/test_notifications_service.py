"""Unit tests for the notification dispatcher.

Tests the NotificationDispatcher for:
- Email syntax gating (no send for invalid addresses)
- Per-recipient failure capture
- Result ordering under concurrent completion
- Concurrency of sends
"""

import asyncio
import threading
import time
from unittest.mock import Mock

import pytest

from job_mailer.domain.models import Recipient
from job_mailer.notifications.models import NotificationTemplateError
from job_mailer.notifications.service import (
    INVALID_EMAIL_ERROR,
    NotificationDispatcher,
    is_valid_email,
)
from tests.helpers import FakeSMTPClient


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def dispatcher(env_config, fake_smtp):
    return NotificationDispatcher(env_config, smtp_client=fake_smtp)


@pytest.mark.parametrize(
    "email, valid",
    [
        ("alice@x.com", True),
        ("first.last+tag@sub.example.co.uk", True),
        ("not-an-email", False),
        ("alice@x", False),
        ("alice@@x.com", False),
        ("al ice@x.com", False),
        ("@x.com", False),
        ("", False),
        (None, False),
    ],
)
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid


def test_valid_and_invalid_recipients(dispatcher, fake_smtp, job):
    recipients = [
        Recipient(email="alice@x.com", name="Alice"),
        Recipient(email="not-an-email", name="Bob"),
        Recipient(email=None, name="Eve"),
    ]

    results = run(dispatcher.dispatch(job, recipients))

    assert [r.to_dict() for r in results] == [
        {"email": "alice@x.com", "status": "success"},
        {"email": "not-an-email", "status": "failed", "error": INVALID_EMAIL_ERROR},
        {"email": "unknown", "status": "failed", "error": INVALID_EMAIL_ERROR},
    ]
    assert fake_smtp.call_count == 1
    assert fake_smtp.recipients() == ["alice@x.com"]


def test_message_contents(dispatcher, fake_smtp, job):
    run(dispatcher.dispatch(job, [Recipient(email="alice@x.com", name="Alice")]))

    message = fake_smtp.sent[0]
    assert message["From"] == "Careervalore <jobs@careervalore.com>"
    assert message["Subject"] == "New Job Opportunity: Eng at Acme"
    html = message.get_body(preferencelist=("html",)).get_content()
    assert "Dear Alice," in html
    assert "https://jobs.example.com/665f1c2ab4d0" in html


def test_transport_failure_is_per_recipient(env_config, job):
    smtp = FakeSMTPClient(fail_for=["bob@x.com"])
    dispatcher = NotificationDispatcher(env_config, smtp_client=smtp)

    results = run(dispatcher.dispatch(job, [
        Recipient(email="alice@x.com"),
        Recipient(email="bob@x.com"),
        Recipient(email="carol@x.com"),
    ]))

    assert [r.status for r in results] == ["success", "failed", "success"]
    assert "refused" in results[1].error
    assert smtp.call_count == 3


def test_template_failure_is_per_recipient(env_config, fake_smtp, job):
    renderer = Mock()
    renderer.render_notification.side_effect = NotificationTemplateError("Template rendering failed: boom")
    dispatcher = NotificationDispatcher(env_config, template_renderer=renderer, smtp_client=fake_smtp)

    results = run(dispatcher.dispatch(job, [Recipient(email="alice@x.com")]))

    assert results[0].status == "failed"
    assert results[0].error == "Template rendering failed: boom"
    assert fake_smtp.call_count == 0


def test_unexpected_transport_error_is_captured(env_config, job):
    smtp = Mock()
    smtp.send.side_effect = RuntimeError("kaboom")
    dispatcher = NotificationDispatcher(env_config, smtp_client=smtp)

    results = run(dispatcher.dispatch(job, [Recipient(email="alice@x.com")]))

    assert results[0].to_dict() == {"email": "alice@x.com", "status": "failed", "error": "kaboom"}


def test_results_keep_input_order_when_sends_finish_out_of_order(env_config, job):
    delays = {"slow@x.com": 0.2, "medium@x.com": 0.1, "fast@x.com": 0.0}
    finished = []

    class SlowSMTP:
        def send(self, message, env_config):
            time.sleep(delays[message["To"]])
            finished.append(message["To"])

    dispatcher = NotificationDispatcher(env_config, smtp_client=SlowSMTP())
    recipients = [Recipient(email=email) for email in delays]

    results = run(dispatcher.dispatch(job, recipients))

    assert [r.email for r in results] == ["slow@x.com", "medium@x.com", "fast@x.com"]
    assert finished[0] == "fast@x.com"


def test_sends_run_concurrently(env_config, job):
    barrier = threading.Barrier(3, timeout=5)

    class BarrierSMTP:
        def send(self, message, env_config):
            # Raises BrokenBarrierError unless all three sends are in flight together
            barrier.wait()

    dispatcher = NotificationDispatcher(env_config, smtp_client=BarrierSMTP())
    recipients = [Recipient(email=f"user{i}@x.com") for i in range(3)]

    results = run(dispatcher.dispatch(job, recipients))

    assert all(r.is_success() for r in results)


def test_empty_batch(dispatcher, job):
    assert run(dispatcher.dispatch(job, [])) == []
