"""Markdown tokenization backed by ``markdown-it-py``."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Protocol, Sequence

from markdown_it import MarkdownIt
from markdown_it.token import Token

from ...services.settings import SmartSelectSettings
from ..document_model import TextDocument

LOGGER = logging.getLogger(__name__)


class Tokenizer(Protocol):
    """Anything able to turn a document into a flat block-token stream.

    ``parse`` may also be a coroutine function; the selection provider awaits it.
    """

    def parse(self, document: TextDocument) -> Sequence[Token]:
        ...


class MarkdownEngine:
    """Parses documents into ``markdown-it`` tokens, caching per document version."""

    def __init__(self, settings: SmartSelectSettings | None = None) -> None:
        self._settings = settings or SmartSelectSettings()
        self._parser: MarkdownIt | None = None
        self._cache: OrderedDict[str, tuple[Token, ...]] = OrderedDict()
        self._lock = threading.Lock()

    @property
    def settings(self) -> SmartSelectSettings:
        return self._settings

    def parse(self, document: TextDocument) -> tuple[Token, ...]:
        """Return the block token stream for ``document``."""

        key = document.version_signature()
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                self._cache.move_to_end(key)
                return cached
        tokens = tuple(self._build_parser().parse(document.text))
        LOGGER.debug("Tokenized %s into %d tokens", document.uri, len(tokens))
        self._remember(key, tokens)
        return tokens

    def _remember(self, key: str, tokens: tuple[Token, ...]) -> None:
        limit = self._settings.token_cache_size
        if limit <= 0:
            return
        with self._lock:
            self._cache[key] = tokens
            self._cache.move_to_end(key)
            while len(self._cache) > limit:
                self._cache.popitem(last=False)

    def _build_parser(self) -> MarkdownIt:
        if self._parser is None:
            parser = MarkdownIt(self._settings.markdown_preset, {"html": True})
            if self._settings.enable_tables:
                parser.enable("table")
            if self._settings.enable_strikethrough:
                parser.enable("strikethrough")
            self._parser = parser
        return self._parser


__all__ = ["MarkdownEngine", "Tokenizer"]
