"""Selection chains derived from the block token stream.

Blocks are folded outermost first: every step produces a new innermost node
whose parent is the chain built so far. How a block's range joins that chain is
decided by :func:`classify_relation`, a small decision table over containment,
equality and shared lines. Blocks whose range does not relate cleanly to the
chain are ignored, which can drop an expansion step for unusual constructs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from ..core.ranges import Position, Range
from ..editor.document_model import LineSource
from ..services.settings import DEFAULT_LIST_DEPTH_CAP
from .tokens import is_list, token_span, tokens_for_position
from .types import BlockToken, SelectionRange

LOGGER = logging.getLogger(__name__)


class RangeRelation(Enum):
    """How a freshly computed block range relates to the current chain node."""

    CONTAINS = "contains"
    EQUAL = "equal"
    SAME_LINES = "same_lines"
    EXTENDS_ONE_LINE = "extends_one_line"
    SHARED_END_LINE = "shared_end_line"
    DISJOINT = "disjoint"


def classify_relation(block_range: Range, parent_range: Range) -> RangeRelation:
    if parent_range == block_range:
        return RangeRelation.EQUAL
    if parent_range.contains(block_range):
        return RangeRelation.CONTAINS
    if block_range.same_lines(parent_range):
        return RangeRelation.SAME_LINES
    if parent_range.end.line + 1 == block_range.end.line:
        return RangeRelation.EXTENDS_ONE_LINE
    if parent_range.end.line == block_range.end.line:
        return RangeRelation.SHARED_END_LINE
    return RangeRelation.DISJOINT


def enclosing_ancestor(node: SelectionRange | None, target: Range) -> SelectionRange | None:
    """Walk outward from ``node`` to the first node whose range contains ``target``."""

    while node is not None and not node.range.contains(target):
        node = node.parent
    return node


@dataclass(slots=True)
class BlockRangeBuilder:
    """Builds block selection chains for a single cursor line."""

    document: LineSource
    cursor_line: int
    list_depth_cap: int = DEFAULT_LIST_DEPTH_CAP

    def build(self, tokens: Sequence[BlockToken], header_range: SelectionRange | None = None) -> SelectionRange | None:
        blocks = tokens_for_position(tokens, self.cursor_line)
        if not blocks:
            return None

        if header_range is not None:
            current: SelectionRange | None = header_range
            remaining = blocks
        else:
            current = self.create_block_range(blocks[0])
            remaining = blocks[1:]

        for index, block in enumerate(remaining):
            if is_list(block):
                return self.create_list_range(remaining[index:], current)
            current = self.create_block_range(block, current)
        return current

    def create_block_range(self, block: BlockToken, parent: SelectionRange | None = None) -> SelectionRange | None:
        if block.type == "fence":
            return self.create_fenced_range(block, parent)

        start, end = token_span(block)  # type: ignore[misc]
        start_line = start + 1 if self._is_blank(start) else start
        end_line = end if start_line == end else end - 1
        if block.type == "paragraph_open" and end - start == 2:
            start_line = end_line = self.cursor_line
        block_range = Range(Position(start_line, 0), self._line_end(end_line))

        if parent is None:
            return SelectionRange(block_range)

        relation = classify_relation(block_range, parent.range)
        if relation is RangeRelation.CONTAINS:
            return SelectionRange(block_range, parent)
        if relation is RangeRelation.EQUAL:
            return parent
        if relation is RangeRelation.SAME_LINES:
            if block_range.end.character > parent.range.end.character:
                return SelectionRange(block_range)
            return parent
        if relation is RangeRelation.EXTENDS_ONE_LINE:
            adjusted = Range(block_range.start, block_range.end.translate(-1).with_(character=parent.range.end.character))
            if adjusted == parent.range:
                return parent
            return SelectionRange(adjusted, parent)
        if relation is RangeRelation.SHARED_END_LINE:
            adjusted = Range(parent.range.start, block_range.end)
            if adjusted == parent.range:
                return parent
            return SelectionRange(adjusted, parent.parent)
        LOGGER.debug("Ignoring %s at %s: unrelated to %s", block.type, block_range, parent.range)
        return parent

    def create_fenced_range(self, block: BlockToken, parent: SelectionRange | None = None) -> SelectionRange | None:
        start, end = token_span(block)  # type: ignore[misc]
        start_line = start
        end_line = self._clamp_line(end - 1)
        on_fence_line = self.cursor_line in (start_line, end_line)
        fence_range = Range(Position(start_line, 0), self._line_end(end_line))
        content_range = None
        if end_line - start_line > 2 and not on_fence_line:
            content_range = Range(Position(start_line + 1, 0), self._line_end(end_line - 1))

        if parent is not None and content_range is not None:
            relation = classify_relation(fence_range, parent.range)
            if relation is RangeRelation.CONTAINS:
                return SelectionRange(content_range, SelectionRange(fence_range, parent))
            if relation is RangeRelation.EQUAL:
                return SelectionRange(content_range, parent)
            if relation is RangeRelation.SAME_LINES:
                revised = self._wider_on_same_lines(fence_range, parent.range)
                if revised == parent.range:
                    return SelectionRange(content_range, parent)
                return SelectionRange(content_range, SelectionRange(revised, enclosing_ancestor(parent, revised)))
            if relation is RangeRelation.SHARED_END_LINE:
                return SelectionRange(content_range, SelectionRange(fence_range, parent))
            LOGGER.debug("Ignoring fence at %s: unrelated to %s", fence_range, parent.range)
            return parent

        if content_range is not None:
            return SelectionRange(content_range, SelectionRange(fence_range))

        if parent is not None:
            relation = classify_relation(fence_range, parent.range)
            if relation is RangeRelation.CONTAINS:
                return SelectionRange(fence_range, parent)
            if relation is RangeRelation.EQUAL:
                return parent
            if relation is RangeRelation.SAME_LINES:
                return SelectionRange(self._wider_on_same_lines(fence_range, parent.range), parent.parent)
            if relation is RangeRelation.SHARED_END_LINE:
                return SelectionRange(fence_range, parent)
            LOGGER.debug("Ignoring fence at %s: unrelated to %s", fence_range, parent.range)
            return parent

        return SelectionRange(fence_range)

    def create_list_range(self, blocks: Sequence[BlockToken], parent: SelectionRange | None = None) -> SelectionRange | None:
        current = parent
        level = blocks[0].level
        index = 0
        while level < self.list_depth_cap and index < len(blocks) and is_list(blocks[index]):
            block = blocks[index]
            if block.level == level:
                start, end = token_span(block)  # type: ignore[misc]
                # top-level lists swallow one trailing blank line
                end_line = end - 2 if level == 0 else end - 1
                end_line = self._clamp_line(max(start, end_line))
                list_range = Range(Position(start, 0), self._line_end(end_line))
                if (
                    current is not None
                    and start - current.range.start.line <= 1
                    and end_line == current.range.end.line
                ):
                    current = SelectionRange(list_range, current.parent)
                else:
                    current = SelectionRange(list_range, current)
                level += 1
            index += 1

        if level == self.list_depth_cap:
            return current
        for block in blocks[index:]:
            current = self.create_block_range(block, current)
        return current

    @staticmethod
    def _wider_on_same_lines(fence_range: Range, parent_range: Range) -> Range:
        return fence_range if fence_range.end.character > parent_range.end.character else parent_range

    def _is_blank(self, line: int) -> bool:
        return 0 <= line < self.document.line_count and self.document.is_empty_or_whitespace(line)

    def _clamp_line(self, line: int) -> int:
        return max(0, min(line, self.document.line_count - 1))

    def _line_end(self, line: int) -> Position:
        line = self._clamp_line(line)
        return Position(line, self.document.line_length(line))


def block_selection_range(
    document: LineSource,
    tokens: Sequence[BlockToken],
    position: Position,
    header_range: SelectionRange | None = None,
    *,
    list_depth_cap: int = DEFAULT_LIST_DEPTH_CAP,
) -> SelectionRange | None:
    """Build the block chain for ``position`` seeded with ``header_range``."""

    builder = BlockRangeBuilder(document, position.line, list_depth_cap)
    return builder.build(tokens, header_range)


__all__ = [
    "RangeRelation",
    "classify_relation",
    "enclosing_ancestor",
    "BlockRangeBuilder",
    "block_selection_range",
]
