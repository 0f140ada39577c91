"""Markdown tokenization and outline helpers."""

from .markdown import MarkdownEngine
from .toc import TableOfContentsProvider, TocEntry

__all__ = ["MarkdownEngine", "TableOfContentsProvider", "TocEntry"]
