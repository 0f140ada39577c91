"""Smart selection: nested expand-selection ranges for Markdown documents."""

from .blocks import BlockRangeBuilder, RangeRelation, block_selection_range, classify_relation
from .headers import header_selection_range
from .provider import MarkdownSmartSelect
from .tokens import is_block_element, is_list, tokens_for_position
from .types import SelectionRange

__all__ = [
    "BlockRangeBuilder",
    "MarkdownSmartSelect",
    "RangeRelation",
    "SelectionRange",
    "block_selection_range",
    "classify_relation",
    "header_selection_range",
    "is_block_element",
    "is_list",
    "tokens_for_position",
]
