"""Core domain types: positions, ranges and errors."""

from .errors import DocumentNotFoundError, InvalidPositionError, LineOutOfBoundsError, SelectionError
from .ranges import Position, Range

__all__ = [
    "Position",
    "Range",
    "SelectionError",
    "LineOutOfBoundsError",
    "InvalidPositionError",
    "DocumentNotFoundError",
]
