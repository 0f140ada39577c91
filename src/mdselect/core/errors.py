"""Standardized error types raised by the selection stack.

Every error carries a machine-readable ``error_code`` plus a human readable
message so the CLI (and any host integration) can report failures uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar


class ErrorCode:
    """Constants for error codes attached to :class:`SelectionError`."""

    LINE_OUT_OF_BOUNDS = "line_out_of_bounds"
    INVALID_POSITION = "invalid_position"
    DOCUMENT_NOT_FOUND = "document_not_found"
    INTERNAL_ERROR = "internal_error"


@dataclass
class SelectionError(Exception):
    """Base exception class for smart selection errors.

    Attributes:
        error_code: Machine-readable error identifier.
        message: Human-readable error description.
        details: Additional structured error information.
        suggestion: Actionable guidance for recovery.
    """

    error_code: str = ErrorCode.INTERNAL_ERROR
    message: str = "Smart selection failed"
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = ""

    severity: ClassVar[str] = "error"

    def __post_init__(self) -> None:
        Exception.__init__(self, self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dictionary for JSON output."""
        result: dict[str, Any] = {
            "error": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = dict(self.details)
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


@dataclass
class LineOutOfBoundsError(SelectionError):
    """Error raised when a line number is outside the document bounds."""

    error_code: str = field(default=ErrorCode.LINE_OUT_OF_BOUNDS)
    message: str = field(default="Line number is out of bounds")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Check the document line count before requesting a line")

    line: int | None = field(default=None)
    total_lines: int | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.line is not None:
            result["line"] = self.line
        if self.total_lines is not None:
            result["total_lines"] = self.total_lines
        return result


@dataclass
class InvalidPositionError(SelectionError):
    """Error raised when a cursor position cannot be interpreted."""

    error_code: str = field(default=ErrorCode.INVALID_POSITION)
    message: str = field(default="Position is malformed")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Positions are zero-based LINE:CHAR pairs, e.g. 12:0")

    value: Any = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.value is not None:
            result["value"] = repr(self.value)
        return result


@dataclass
class DocumentNotFoundError(SelectionError):
    """Error raised when a document cannot be loaded from disk."""

    error_code: str = field(default=ErrorCode.DOCUMENT_NOT_FOUND)
    message: str = field(default="The document could not be found")
    details: dict[str, Any] = field(default_factory=dict)
    suggestion: str = field(default="Verify the path points to a readable Markdown file")

    path: str | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.path is not None:
            result["path"] = self.path
        return result


__all__ = [
    "ErrorCode",
    "SelectionError",
    "LineOutOfBoundsError",
    "InvalidPositionError",
    "DocumentNotFoundError",
]
