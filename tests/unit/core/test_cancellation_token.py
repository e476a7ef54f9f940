"""Tests for CancellationToken."""

import threading

from beetask.core.process import CancellationToken


def test_new_token_is_not_cancelled() -> None:
    assert not CancellationToken().is_cancelled


def test_cancel_is_idempotent() -> None:
    token = CancellationToken()
    token.cancel()
    token.cancel()
    assert token.is_cancelled


def test_cancel_from_another_thread_is_visible() -> None:
    token = CancellationToken()
    thread = threading.Thread(target=token.cancel)
    thread.start()
    thread.join()
    assert token.is_cancelled
