"""Tests for cancellation tokens."""

from __future__ import annotations

from mdselect.editor.cancellation import NONE_TOKEN, CancellationTokenSource


def test_source_cancels_its_token() -> None:
    source = CancellationTokenSource()

    assert source.token.is_cancellation_requested is False
    source.cancel()
    assert source.token.is_cancellation_requested is True


def test_callbacks_run_once_on_cancel() -> None:
    source = CancellationTokenSource()
    calls: list[str] = []
    source.token.on_cancelled(lambda: calls.append("first"))

    source.cancel()
    source.cancel()

    assert calls == ["first"]


def test_callback_registered_after_cancel_runs_immediately() -> None:
    source = CancellationTokenSource()
    source.cancel()
    calls: list[str] = []

    source.token.on_cancelled(lambda: calls.append("late"))

    assert calls == ["late"]


def test_none_token_is_never_cancelled() -> None:
    assert NONE_TOKEN.is_cancellation_requested is False
