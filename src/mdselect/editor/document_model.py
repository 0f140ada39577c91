"""In-memory text documents exposing the line access used by smart selection."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..core.errors import DocumentNotFoundError, LineOutOfBoundsError
from ..utils.file_io import compute_text_digest, load_text

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@runtime_checkable
class LineSource(Protocol):
    """Read-only line access consumed by the selection builders."""

    @property
    def line_count(self) -> int:
        ...

    def line_text(self, line: int) -> str:
        ...

    def line_length(self, line: int) -> int:
        ...

    def is_empty_or_whitespace(self, line: int) -> bool:
        ...


@dataclass(slots=True, frozen=True)
class TextLine:
    """Single line of a :class:`TextDocument` without its line break."""

    line_number: int
    text: str

    @property
    def is_empty_or_whitespace(self) -> bool:
        return not self.text.strip()

    def __len__(self) -> int:
        return len(self.text)


@dataclass(slots=True)
class TextDocument:
    """Immutable-by-convention snapshot of a Markdown document."""

    text: str = ""
    uri: str = "untitled:document"
    language: str = "markdown"
    version_id: int = 1
    content_hash: str = field(default_factory=str)
    _lines: tuple[str, ...] = field(init=False, repr=False, default=())

    def __post_init__(self) -> None:
        self._lines = tuple(_LINE_BREAK.split(self.text))
        if not self.content_hash:
            self.content_hash = compute_text_digest(self.text)

    @classmethod
    def from_path(cls, path: Path | str, *, encoding: str | None = None) -> TextDocument:
        """Load a document from disk, detecting its encoding."""

        target = Path(path)
        if not target.is_file():
            raise DocumentNotFoundError(message=f"No such file: {target}", path=str(target))
        loaded = load_text(target, encoding=encoding)
        return cls(
            text=loaded.text,
            uri=target.resolve().as_uri(),
            language=loaded.format.language,
            content_hash=loaded.digest,
        )

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_at(self, line: int) -> TextLine:
        if line < 0 or line >= len(self._lines):
            raise LineOutOfBoundsError(
                message=f"Line {line} is outside the document (0..{len(self._lines) - 1})",
                line=line,
                total_lines=len(self._lines),
            )
        return TextLine(line, self._lines[line])

    def line_text(self, line: int) -> str:
        return self.line_at(line).text

    def line_length(self, line: int) -> int:
        return len(self.line_at(line).text)

    def is_empty_or_whitespace(self, line: int) -> bool:
        return self.line_at(line).is_empty_or_whitespace

    def version_signature(self) -> str:
        return f"{self.uri}:{self.version_id}:{self.content_hash}"


__all__ = ["LineSource", "TextDocument", "TextLine"]
