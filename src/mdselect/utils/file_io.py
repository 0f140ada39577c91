"""Loading Markdown sources from disk."""

from __future__ import annotations

import codecs
import hashlib
import locale
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "DocumentFormat",
    "LoadedText",
    "load_text",
    "detect_format",
    "sniff_encoding",
    "compute_text_digest",
]

# UTF-32 marks first: the UTF-32-LE mark begins with the UTF-16-LE one.
_BYTE_ORDER_MARKS: tuple[tuple[bytes, str], ...] = (
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)
_MARKDOWN_SUFFIXES = frozenset({".md", ".markdown", ".mdown", ".mkd", ".mkdn"})
_TEXT_SUFFIXES = frozenset({".txt", ".text"})
_FOREIGN_NEWLINE = re.compile(r"\r\n?")


class DocumentFormat(Enum):
    """What a file on disk most likely holds, judged by its suffix."""

    MARKDOWN = "markdown"
    TEXT = "text"
    UNKNOWN = "unknown"

    @property
    def language(self) -> str:
        return "text" if self is DocumentFormat.TEXT else "markdown"


@dataclass(slots=True, frozen=True)
class LoadedText:
    """Decoded file contents plus how they were decoded."""

    path: Path
    text: str
    encoding: str
    format: DocumentFormat

    @property
    def digest(self) -> str:
        return compute_text_digest(self.text)


def load_text(path: Path | str, *, encoding: str | None = None) -> LoadedText:
    """Read ``path`` and decode it, normalizing line breaks to ``\\n``.

    Without an explicit ``encoding`` a byte order mark wins, then UTF-8, the
    locale's preferred encoding and finally latin-1, which accepts any byte.
    """

    target = Path(path)
    raw = target.read_bytes()
    codec = encoding or sniff_encoding(raw)
    text = raw.decode(codec)
    if text.startswith("\ufeff"):
        text = text[1:]
    return LoadedText(
        path=target,
        text=_FOREIGN_NEWLINE.sub("\n", text),
        encoding=codec,
        format=detect_format(target),
    )


def detect_format(path: Path | str) -> DocumentFormat:
    suffix = Path(path).suffix.lower()
    if suffix in _MARKDOWN_SUFFIXES:
        return DocumentFormat.MARKDOWN
    if suffix in _TEXT_SUFFIXES:
        return DocumentFormat.TEXT
    return DocumentFormat.UNKNOWN


def sniff_encoding(raw: bytes) -> str:
    for mark, codec in _BYTE_ORDER_MARKS:
        if raw.startswith(mark):
            return codec
    candidates = dict.fromkeys(("utf-8", locale.getpreferredencoding(False) or "utf-8"))
    for codec in candidates:
        try:
            raw.decode(codec)
        except (UnicodeDecodeError, LookupError):
            continue
        return codec
    return "latin-1"


def compute_text_digest(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()
