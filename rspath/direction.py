"""
Horizontal movement directions on the tile grid.
"""

from __future__ import annotations
from typing import NamedTuple, Tuple


class Direction(NamedTuple):
    """One of the eight single-tile horizontal moves."""

    name: str
    dx: int
    dy: int

    @property
    def is_diagonal(self) -> bool:
        """Return True if the move changes both x and y."""
        return self.dx != 0 and self.dy != 0

    def __repr__(self) -> str:
        return f"<Direction {self.name} ({self.dx}, {self.dy})>"


WEST = Direction("WEST", -1, 0)
EAST = Direction("EAST", 1, 0)
SOUTH = Direction("SOUTH", 0, -1)
NORTH = Direction("NORTH", 0, 1)
SOUTH_WEST = Direction("SOUTH_WEST", -1, -1)
SOUTH_EAST = Direction("SOUTH_EAST", 1, -1)
NORTH_WEST = Direction("NORTH_WEST", -1, 1)
NORTH_EAST = Direction("NORTH_EAST", 1, 1)

# Order in which the engine evaluates neighbouring tiles; decides which of
# several equally short paths a search returns.
DIRECTIONS: Tuple[Direction, ...] = (
    WEST,
    EAST,
    SOUTH,
    NORTH,
    SOUTH_WEST,
    SOUTH_EAST,
    NORTH_WEST,
    NORTH_EAST,
)
