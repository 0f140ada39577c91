"""Tests for the position and range primitives."""

from __future__ import annotations

import pytest

from mdselect.core.errors import InvalidPositionError
from mdselect.core.ranges import Position, Range


def test_positions_order_by_line_then_character() -> None:
    assert Position(1, 5) < Position(2, 0)
    assert Position(2, 1) > Position(2, 0)
    assert sorted([Position(3, 0), Position(1, 9), Position(1, 2)]) == [
        Position(1, 2),
        Position(1, 9),
        Position(3, 0),
    ]


def test_position_translate_and_with() -> None:
    position = Position(4, 2)
    assert position.translate(1) == Position(5, 2)
    assert position.translate(-1, 3) == Position(3, 5)
    assert position.with_(character=0) == Position(4, 0)


def test_position_negative_values_clamp_to_zero() -> None:
    assert Position(-3, -1) == Position(0, 0)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("3:4", Position(3, 4)),
        (" 7 ", Position(7, 0)),
        ((2, 9), Position(2, 9)),
        ({"line": 5, "character": 1}, Position(5, 1)),
        ({"line": 5}, Position(5, 0)),
    ],
)
def test_position_from_value_accepts_common_shapes(value: object, expected: Position) -> None:
    assert Position.from_value(value) == expected


@pytest.mark.parametrize("value", ["x:1", "", (1, 2, 3), {"character": 2}, object()])
def test_position_from_value_rejects_malformed_input(value: object) -> None:
    with pytest.raises(InvalidPositionError) as excinfo:
        Position.from_value(value)
    assert excinfo.value.to_dict()["error"] == "invalid_position"


def test_range_normalizes_reversed_bounds() -> None:
    span = Range(Position(5, 0), Position(2, 3))
    assert span.start == Position(2, 3)
    assert span.end == Position(5, 0)


def test_range_contains_is_inclusive() -> None:
    outer = Range.from_lines(1, 0, 4, 10)
    assert outer.contains(outer)
    assert outer.contains(Range.from_lines(1, 0, 1, 3))
    assert outer.contains(Position(4, 10))
    assert not outer.contains(Position(4, 11))
    assert not outer.contains(Range.from_lines(0, 5, 2, 0))


def test_range_same_lines_ignores_characters() -> None:
    assert Range.from_lines(2, 0, 4, 1).same_lines(Range.from_lines(2, 7, 4, 9))
    assert not Range.from_lines(2, 0, 4, 1).same_lines(Range.from_lines(2, 0, 5, 1))


def test_range_with_replaces_one_end() -> None:
    span = Range.from_lines(1, 0, 9, 3)
    assert span.with_(end=Position(3, 0)) == Range.from_lines(1, 0, 3, 0)
    assert span.line_span == 9
    assert str(span) == "1:0-9:3"
