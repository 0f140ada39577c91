"""Markdown smart selection: nested expand-selection ranges for Markdown."""

from .core.ranges import Position, Range
from .editor.cancellation import CancellationToken, CancellationTokenSource
from .editor.document_model import TextDocument
from .editor.syntax.markdown import MarkdownEngine
from .editor.syntax.toc import TableOfContentsProvider, TocEntry
from .selection.provider import MarkdownSmartSelect
from .selection.types import SelectionRange
from .services.settings import SettingsStore, SmartSelectSettings

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "CancellationTokenSource",
    "MarkdownEngine",
    "MarkdownSmartSelect",
    "Position",
    "Range",
    "SelectionRange",
    "SettingsStore",
    "SmartSelectSettings",
    "TableOfContentsProvider",
    "TextDocument",
    "TocEntry",
    "__version__",
]
