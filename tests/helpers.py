"""Shared test helpers for building documents, tokens and reading chains.

Import from here instead of duplicating these helpers in individual test files.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Sequence

from mdselect.core.ranges import Position, Range
from mdselect.editor.document_model import TextDocument
from mdselect.editor.syntax.toc import TocEntry
from mdselect.selection.types import SelectionRange


def make_document(lines: Sequence[str], *, uri: str = "memory:test.md") -> TextDocument:
    """Build a document whose lines are exactly ``lines`` (no trailing newline)."""

    return TextDocument(text="\n".join(lines), uri=uri)


def tok(type_: str, start: int | None, end: int | None = None, level: int = 0) -> SimpleNamespace:
    """Return a markdown-it shaped block token."""

    line_map = None if start is None else [start, end]
    return SimpleNamespace(type=type_, map=line_map, level=level)


def rng(start_line: int, start_char: int, end_line: int, end_char: int) -> Range:
    return Range(Position(start_line, start_char), Position(end_line, end_char))


def heading(level: int, line: int, end_line: int, end_char: int, text: str = "") -> TocEntry:
    return TocEntry(
        level=level,
        line=line,
        text=text or f"H{line}",
        slug=f"h{line}",
        range=rng(line, 0, end_line, end_char),
    )


def spans(node: SelectionRange | None) -> list[tuple[int, int, int, int]]:
    """Flatten a chain into ``(start_line, start_char, end_line, end_char)`` tuples."""

    if node is None:
        return []
    return [
        (item.start.line, item.start.character, item.end.line, item.end.character)
        for item in node.ranges()
    ]


def assert_strictly_nested(node: SelectionRange) -> None:
    for child, parent in zip(node, list(node)[1:]):
        assert parent.range.contains(child.range), (child.range, parent.range)
        assert parent.range != child.range, child.range
