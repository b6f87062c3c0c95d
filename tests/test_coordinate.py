import pytest

from rspath.coordinate import Coordinate
from rspath.direction import (
    DIRECTIONS,
    EAST,
    NORTH,
    NORTH_EAST,
    NORTH_WEST,
    SOUTH,
    SOUTH_EAST,
    SOUTH_WEST,
    WEST,
)


def test_direction_order():
    assert DIRECTIONS == (
        WEST,
        EAST,
        SOUTH,
        NORTH,
        SOUTH_WEST,
        SOUTH_EAST,
        NORTH_WEST,
        NORTH_EAST,
    )
    assert [(d.dx, d.dy) for d in DIRECTIONS] == [
        (-1, 0), (1, 0), (0, -1), (0, 1), (-1, -1), (1, -1), (-1, 1), (1, 1)
    ]


def test_diagonals():
    assert [d.name for d in DIRECTIONS if d.is_diagonal] == [
        "SOUTH_WEST", "SOUTH_EAST", "NORTH_WEST", "NORTH_EAST"
    ]


def test_coordinate_value_semantics():
    c = Coordinate(3, 4, 1)
    assert c == (3, 4, 1)
    assert hash(c) == hash((3, 4, 1))
    assert {c: "x"}[(3, 4, 1)] == "x"
    assert Coordinate(1, 2).plane == 0


def test_step_keeps_plane():
    c = Coordinate(10, 10, 2)
    assert c.step(NORTH_WEST) == (9, 11, 2)
    assert c.step(SOUTH) == (10, 9, 2)


def test_from_string_and_str():
    assert Coordinate.from_string("3222, 3218, 0") == (3222, 3218, 0)
    assert Coordinate.from_string("-1,5") == (-1, 5, 0)
    assert str(Coordinate(1, 2, 3)) == "1,2,3"


@pytest.mark.parametrize("text", ["", "1", "1,2,3,4", "a,b", "1.5,2"])
def test_from_string_rejects(text):
    with pytest.raises(ValueError):
        Coordinate.from_string(text)
