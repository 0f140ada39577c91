"""Smart selection provider: merges heading and block chains per cursor."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Iterable, Sequence

from ..core.ranges import Position
from ..editor.cancellation import NONE_TOKEN, CancellationToken
from ..editor.document_model import TextDocument
from ..editor.syntax.markdown import MarkdownEngine, Tokenizer
from ..editor.syntax.toc import OutlineSource, TableOfContentsProvider
from ..services.settings import SmartSelectSettings
from .blocks import block_selection_range
from .headers import header_selection_range
from .types import BlockToken, HeadingEntry, SelectionRange

LOGGER = logging.getLogger(__name__)

OutlineFactory = Callable[[TextDocument, Sequence[BlockToken]], OutlineSource]


class MarkdownSmartSelect:
    """Provides expand-selection chains for positions in a Markdown document."""

    def __init__(
        self,
        engine: Tokenizer | None = None,
        *,
        outline_factory: OutlineFactory | None = None,
        settings: SmartSelectSettings | None = None,
    ) -> None:
        self._settings = settings or getattr(engine, "settings", None) or SmartSelectSettings()
        self._engine = engine or MarkdownEngine(self._settings)
        self._outline_factory = outline_factory or TableOfContentsProvider

    @property
    def settings(self) -> SmartSelectSettings:
        return self._settings

    async def provide_selection_ranges(
        self,
        document: TextDocument,
        positions: Iterable[Position | Any],
        token: CancellationToken | None = None,
    ) -> list[SelectionRange]:
        """Return one innermost chain node per position that has any structure.

        Positions without an enclosing structure are dropped. Once ``token`` is
        cancelled no further positions are started.
        """

        token = token or NONE_TOKEN
        requested = [Position.from_value(position) for position in positions]
        if not requested or token.is_cancellation_requested:
            return []

        # one parse per request; the outline is built from the same tokens
        tokens = tuple(await _resolve(self._engine.parse(document)))
        toc = await _resolve(self._outline_factory(document, tokens).get_toc())

        results: list[SelectionRange] = []
        for position in requested:
            if token.is_cancellation_requested:
                LOGGER.debug("Selection request cancelled after %d of %d positions", len(results), len(requested))
                break
            selection = self.provide_selection_range(document, position, tokens, toc)
            if selection is not None:
                results.append(selection)
        return results

    def provide_selection_range(
        self,
        document: TextDocument,
        position: Position,
        tokens: Sequence[BlockToken],
        toc: Sequence[HeadingEntry],
    ) -> SelectionRange | None:
        header_range = header_selection_range(document, toc, position)
        block_range = block_selection_range(
            document,
            tokens,
            position,
            header_range,
            list_depth_cap=self._settings.list_depth_cap,
        )
        return block_range or header_range


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


__all__ = ["MarkdownSmartSelect", "OutlineFactory"]
