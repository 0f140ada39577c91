"""Heading outline (table of contents) extraction."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Protocol, Sequence

from markdown_it.token import Token

from ...core.ranges import Position, Range
from ..document_model import TextDocument
from .markdown import Tokenizer

LOGGER = logging.getLogger(__name__)
_SLUG_PATTERN = re.compile(r"[^\w\- ]+", re.UNICODE)


@dataclass(slots=True, frozen=True)
class TocEntry:
    """One heading plus the line range of everything it owns."""

    level: int
    line: int
    text: str
    slug: str
    range: Range


class OutlineSource(Protocol):
    """Anything exposing a heading outline; ``get_toc`` may be a coroutine."""

    def get_toc(self) -> Any:
        ...


class TableOfContentsProvider:
    """Builds the heading outline of a document from its block tokens."""

    def __init__(self, document: TextDocument, tokens: Sequence[Token]) -> None:
        self._document = document
        self._tokens = tokens
        self._toc: tuple[TocEntry, ...] | None = None

    def get_toc(self) -> tuple[TocEntry, ...]:
        if self._toc is None:
            self._toc = self._build_toc(self._tokens)
        return self._toc

    def lookup(self, slug: str) -> TocEntry | None:
        normalized = slug.strip().lower()
        for entry in self.get_toc():
            if entry.slug == normalized:
                return entry
        return None

    def _build_toc(self, tokens: Sequence[Token]) -> tuple[TocEntry, ...]:
        headings: list[tuple[int, int, str]] = []
        for index, token in enumerate(tokens):
            if token.type != "heading_open" or not token.map:
                continue
            inline = tokens[index + 1] if index + 1 < len(tokens) else None
            text = inline.content.strip() if inline is not None and inline.type == "inline" else ""
            headings.append((_heading_level(token), token.map[0], text))

        slugs: dict[str, int] = {}
        last_line = max(0, self._document.line_count - 1)
        entries: list[TocEntry] = []
        for position, (level, line, text) in enumerate(headings):
            end_line = last_line
            for next_level, next_line, _ in headings[position + 1 :]:
                if next_level <= level:
                    end_line = next_line - 1
                    break
            end = Position(end_line, self._document.line_length(end_line))
            entries.append(
                TocEntry(
                    level=level,
                    line=line,
                    text=text,
                    slug=_unique_slug(text, slugs),
                    range=Range(Position(line, 0), end),
                )
            )
        LOGGER.debug("Outline for %s has %d headings", self._document.uri, len(entries))
        return tuple(entries)


def _heading_level(token: Token) -> int:
    try:
        return int(token.tag.lstrip("h"))
    except ValueError:
        return token.markup.count("#") or 1


def _unique_slug(text: str, seen: dict[str, int]) -> str:
    slug = _SLUG_PATTERN.sub("", text.strip().lower()).replace(" ", "-") or "section"
    count = seen.get(slug, 0)
    seen[slug] = count + 1
    return slug if count == 0 else f"{slug}-{count}"


def build_toc(engine: Tokenizer, document: TextDocument) -> tuple[TocEntry, ...]:
    """Parse ``document`` with a synchronous ``engine`` and return its outline."""

    return TableOfContentsProvider(document, engine.parse(document)).get_toc()


__all__ = ["OutlineSource", "TableOfContentsProvider", "TocEntry", "build_toc"]
