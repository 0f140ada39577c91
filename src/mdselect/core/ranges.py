"""Structured helpers for representing line/character positions and spans."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator

from .errors import InvalidPositionError


@dataclass(slots=True, frozen=True, order=True)
class Position(Sequence[int]):
    """Zero-based ``(line, character)`` coordinate inside a text document."""

    line: int
    character: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "line", self._coerce_index(self.line, "line"))
        object.__setattr__(self, "character", self._coerce_index(self.character, "character"))

    @staticmethod
    def _coerce_index(value: Any, label: str) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError) as exc:
            raise InvalidPositionError(message=f"Position {label} must be an integer", value=value) from exc
        if number < 0:
            return 0
        return number

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int | slice) -> int | tuple[int, ...]:
        if isinstance(index, slice):
            return self.to_tuple()[index]
        if index == 0:
            return self.line
        if index == 1:
            return self.character
        raise IndexError("Position index out of range")

    def __iter__(self) -> Iterator[int]:
        yield self.line
        yield self.character

    def __str__(self) -> str:
        return f"{self.line}:{self.character}"

    def translate(self, line_delta: int = 0, character_delta: int = 0) -> Position:
        """Return a position shifted by the given deltas."""

        return Position(self.line + line_delta, self.character + character_delta)

    def with_(self, *, line: int | None = None, character: int | None = None) -> Position:
        """Return a copy with ``line`` and/or ``character`` replaced."""

        return Position(
            self.line if line is None else line,
            self.character if character is None else character,
        )

    def to_tuple(self) -> tuple[int, int]:
        return (self.line, self.character)

    def to_dict(self) -> dict[str, int]:
        return {"line": self.line, "character": self.character}

    @classmethod
    def from_value(cls, value: Any) -> Position:
        """Coerce ``value`` into a :class:`Position`.

        Accepts positions, ``(line, character)`` pairs, mappings with
        ``line``/``character`` keys and ``"LINE:CHAR"`` strings.
        """

        if isinstance(value, Position):
            return value
        if isinstance(value, str):
            head, sep, tail = value.strip().partition(":")
            if not head:
                raise InvalidPositionError(message="Position text must look like LINE:CHAR", value=value)
            return cls(head, tail if sep else 0)
        if isinstance(value, Mapping):
            if "line" not in value:
                raise InvalidPositionError(message="Position mappings require a line key", value=value)
            return cls(value["line"], value.get("character", 0))
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            seq = list(value)
            if len(seq) != 2:
                raise InvalidPositionError(message="Position sequences must have exactly two entries", value=value)
            return cls(seq[0], seq[1])
        line = getattr(value, "line", None)
        character = getattr(value, "character", None)
        if line is not None and character is not None:
            return cls(line, character)
        raise InvalidPositionError(message="Unsupported Position input", value=value)


@dataclass(slots=True, frozen=True)
class Range:
    """Span between two positions with ``start <= end``.

    A reversed pair is normalized by swapping, mirroring how editor range types
    behave.
    """

    start: Position
    end: Position

    def __post_init__(self) -> None:
        start = Position.from_value(self.start)
        end = Position.from_value(self.end)
        if end < start:
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def from_lines(cls, start_line: int, start_character: int, end_line: int, end_character: int) -> Range:
        return cls(Position(start_line, start_character), Position(end_line, end_character))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    @property
    def line_span(self) -> int:
        """Return the number of lines touched by the range (inclusive)."""

        return (self.end.line - self.start.line) + 1

    def contains(self, other: Range | Position) -> bool:
        """Return ``True`` when ``other`` lies inside this range (inclusive)."""

        if isinstance(other, Position):
            return self.start <= other <= self.end
        return self.start <= other.start and other.end <= self.end

    def same_lines(self, other: Range) -> bool:
        """Return ``True`` when both ranges start and end on the same lines."""

        return self.start.line == other.start.line and self.end.line == other.end.line

    def with_(self, *, start: Position | None = None, end: Position | None = None) -> Range:
        return Range(self.start if start is None else start, self.end if end is None else end)

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


__all__ = ["Position", "Range"]
