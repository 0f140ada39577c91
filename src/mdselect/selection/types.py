"""Selection chain nodes and the collaborator protocols they are built from."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol, Sequence

from ..core.ranges import Range


class BlockToken(Protocol):
    """Block-level token as produced by ``markdown-it`` (read-only)."""

    type: str
    map: Sequence[int] | None
    level: int


class HeadingEntry(Protocol):
    """Heading outline entry: level, heading line and owned range."""

    @property
    def level(self) -> int:
        ...

    @property
    def line(self) -> int:
        ...

    @property
    def range(self) -> Range:
        ...


@dataclass(slots=True, frozen=True, eq=False)
class SelectionRange:
    """Node of an expand-selection chain.

    Each node owns a reference to the next larger enclosing node. Nodes compare
    by identity: collapsing a step means handing back the very same parent.
    """

    range: Range
    parent: SelectionRange | None = None

    def __iter__(self) -> Iterator[SelectionRange]:
        node: SelectionRange | None = self
        while node is not None:
            yield node
            node = node.parent

    @property
    def depth(self) -> int:
        return sum(1 for _ in self)

    @property
    def root(self) -> SelectionRange:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def ranges(self) -> list[Range]:
        """Return the chain's ranges from innermost to outermost."""

        return [node.range for node in self]

    def to_dict(self) -> dict:
        return {"ranges": [item.to_dict() for item in self.ranges()]}


__all__ = ["BlockToken", "HeadingEntry", "SelectionRange"]
