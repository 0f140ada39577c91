"""Editor-side collaborators: documents, cancellation and Markdown syntax."""

from .cancellation import CancellationToken, CancellationTokenSource
from .document_model import LineSource, TextDocument, TextLine

__all__ = ["CancellationToken", "CancellationTokenSource", "LineSource", "TextDocument", "TextLine"]
