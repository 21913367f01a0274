"""Tests for logging context propagation."""

import asyncio

import pytest

from job_mailer.logging.context import (
    clear_log_context,
    get_log_context,
    log_context,
    new_request_id,
    pop_log_context,
    push_log_context,
)


@pytest.fixture(autouse=True)
def clean_context():
    """Clear logging context before and after each test."""
    clear_log_context()
    yield
    clear_log_context()


def test_empty_context():
    """Test that context starts empty."""
    assert get_log_context() == {}


def test_push_and_pop_restores_previous_state():
    """Test nested pushes unwind in reverse order."""
    token1 = push_log_context(request_id="abc123")
    token2 = push_log_context(recipient="alice@example.com")
    assert get_log_context() == {"request_id": "abc123", "recipient": "alice@example.com"}

    pop_log_context(token2)
    assert get_log_context() == {"request_id": "abc123"}

    pop_log_context(token1)
    assert get_log_context() == {}


def test_context_override():
    """Test that pushing the same key overwrites previous value."""
    token1 = push_log_context(request_id="abc123")
    token2 = push_log_context(request_id="xyz789")
    assert get_log_context() == {"request_id": "xyz789"}

    pop_log_context(token2)
    assert get_log_context() == {"request_id": "abc123"}
    pop_log_context(token1)


def test_context_manager_exception():
    """Test that context is restored even when exception occurs."""
    with pytest.raises(ValueError):
        with log_context(request_id="abc123"):
            assert get_log_context() == {"request_id": "abc123"}
            raise ValueError("Test exception")

    assert get_log_context() == {}


def test_context_isolation():
    """Test that get_log_context returns a copy, not the actual dict."""
    with log_context(request_id="abc123"):
        context = get_log_context()
        context["recipient"] = "modified"
        assert get_log_context() == {"request_id": "abc123"}


def test_context_reaches_worker_threads():
    """Test that asyncio.to_thread carries the caller's context."""

    async def run():
        with log_context(request_id="abc123"):
            return await asyncio.to_thread(get_log_context)

    assert asyncio.run(run()) == {"request_id": "abc123"}


def test_concurrent_tasks_do_not_share_context():
    """Test that each gathered task sees only its own recipient."""

    async def worker(email):
        with log_context(recipient=email):
            await asyncio.sleep(0)
            return get_log_context()["recipient"]

    async def run():
        return await asyncio.gather(worker("a@x.com"), worker("b@x.com"))

    assert asyncio.run(run()) == ["a@x.com", "b@x.com"]


def test_new_request_id_is_short_and_unique():
    first, second = new_request_id(), new_request_id()
    assert len(first) == 12
    assert first != second
