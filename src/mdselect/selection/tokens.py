"""Block token classification."""

from __future__ import annotations

from typing import Iterable

from .types import BlockToken

LIST_TOKEN_TYPES = frozenset({"ordered_list_open", "list_item_open", "bullet_list_open"})
IGNORED_TOKEN_TYPES = frozenset(
    {"list_item_close", "paragraph_close", "bullet_list_close", "inline", "heading_close", "heading_open"}
)


def is_list(token: BlockToken) -> bool:
    return getattr(token, "type", None) in LIST_TOKEN_TYPES


def is_block_element(token: BlockToken) -> bool:
    # headings are covered by the outline, not the block walk
    return getattr(token, "type", None) not in IGNORED_TOKEN_TYPES


def token_span(token: BlockToken) -> tuple[int, int] | None:
    """Return ``(start, end_exclusive)`` for tokens with a usable line map."""

    line_map = getattr(token, "map", None)
    if line_map is None:
        return None
    try:
        start, end = line_map
    except (TypeError, ValueError):
        return None
    if not isinstance(start, int) or not isinstance(end, int) or end < start:
        return None
    return start, end


def tokens_for_position(tokens: Iterable[BlockToken], line: int) -> list[BlockToken]:
    """Return block tokens enclosing ``line``, outermost (longest) first."""

    enclosing: list[tuple[int, BlockToken]] = []
    for token in tokens:
        span = token_span(token)
        if span is None or not span[0] <= line < span[1] or not is_block_element(token):
            continue
        enclosing.append((span[1] - span[0], token))
    enclosing.sort(key=lambda item: item[0], reverse=True)
    return [token for _, token in enclosing]


__all__ = [
    "LIST_TOKEN_TYPES",
    "IGNORED_TOKEN_TYPES",
    "is_list",
    "is_block_element",
    "token_span",
    "tokens_for_position",
]
