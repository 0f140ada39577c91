"""Selection chains derived from the heading outline."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from ..core.ranges import Position, Range
from ..editor.document_model import LineSource
from .types import HeadingEntry, SelectionRange

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class EnclosingHeaders:
    """Headings enclosing a line, ordered outermost first."""

    headers: tuple[HeadingEntry, ...]
    header_on_this_line: bool


def headers_for_position(toc: Sequence[HeadingEntry], position: Position) -> EnclosingHeaders:
    line = position.line
    enclosing = [entry for entry in toc if entry.range.start.line <= line <= entry.range.end.line]
    # the closest heading (largest line) sorts last
    enclosing.sort(key=lambda entry: entry.line - line)
    return EnclosingHeaders(
        headers=tuple(enclosing),
        header_on_this_line=any(entry.line == line for entry in toc),
    )


def first_child_boundary(document: LineSource, header: HeadingEntry, toc: Sequence[HeadingEntry]) -> Position | None:
    """Return the end of the last line before ``header``'s first nested heading.

    Children always start after the parent heading line, so the child line is at
    least 1 and the preceding line exists.
    """

    children = [
        entry
        for entry in toc
        if header.range.contains(entry.range) and entry.range.start.line > header.range.start.line
    ]
    if not children:
        return None
    child_start = min(children, key=lambda entry: entry.line).range.start
    previous_line = child_start.line - 1
    return child_start.translate(-1, document.line_length(previous_line))


def create_header_range(
    header: HeadingEntry,
    is_closest_header: bool,
    on_header_line: bool,
    parent: SelectionRange | None = None,
    child_start: Position | None = None,
) -> SelectionRange:
    full_range = header.range
    content_range = Range(full_range.start.translate(1), full_range.end)
    partial_content_range = (
        content_range.with_(end=child_start) if child_start is not None and is_closest_header else None
    )

    if on_header_line and is_closest_header:
        if child_start is not None:
            return SelectionRange(full_range.with_(end=child_start), SelectionRange(full_range, parent))
        return SelectionRange(full_range, parent)

    if parent is None or not parent.range.contains(full_range):
        parent = None
    section = SelectionRange(content_range, SelectionRange(full_range, parent))
    if partial_content_range is not None:
        return SelectionRange(partial_content_range, section)
    return section


def header_selection_range(
    document: LineSource,
    toc: Sequence[HeadingEntry],
    position: Position,
) -> SelectionRange | None:
    """Build the heading chain for ``position``; ``None`` outside any section."""

    info = headers_for_position(toc, position)
    current: SelectionRange | None = None
    last_index = len(info.headers) - 1
    for index, header in enumerate(info.headers):
        is_closest = index == last_index
        current = create_header_range(
            header,
            is_closest,
            info.header_on_this_line,
            current,
            first_child_boundary(document, header, toc) if is_closest else None,
        )
    if current is not None:
        LOGGER.debug("Header chain at %s has %d levels", position, current.depth)
    return current


__all__ = [
    "EnclosingHeaders",
    "headers_for_position",
    "first_child_boundary",
    "create_header_range",
    "header_selection_range",
]
