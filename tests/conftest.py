"""Shared pytest fixtures."""

from __future__ import annotations

import os

import pytest

from mdselect.editor.syntax.markdown import MarkdownEngine
from mdselect.selection.provider import MarkdownSmartSelect


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("MDSELECT_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def engine() -> MarkdownEngine:
    return MarkdownEngine()


@pytest.fixture
def smart_select(engine: MarkdownEngine) -> MarkdownSmartSelect:
    return MarkdownSmartSelect(engine)


@pytest.fixture
def sectioned_lines() -> list[str]:
    return [
        "# A",
        "",
        "intro text",
        "",
        "## B",
        "",
        "body text",
        "",
        "more text",
    ]


@pytest.fixture
def fenced_lines() -> list[str]:
    return [
        "intro",
        "",
        "```python",
        "a = 1",
        "b = 2",
        "c = 3",
        "```",
        "",
        "outro",
    ]
