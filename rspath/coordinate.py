"""
Tile coordinates in the game world.
"""

from __future__ import annotations
from typing import NamedTuple

from .direction import Direction


class Coordinate(NamedTuple):
    """
    A single tile: x grows east, y grows north, plane is the floor level.
    Compared and hashed by value, so plain (x, y, plane) tuples compare equal.
    """

    x: int
    y: int
    plane: int = 0

    def step(self, direction: Direction) -> Coordinate:
        """Return the neighbouring tile one move away on the same plane."""
        return Coordinate(self.x + direction.dx, self.y + direction.dy, self.plane)

    @classmethod
    def from_string(cls, text: str) -> Coordinate:
        """
        Parse "x,y" or "x,y,plane" (whitespace allowed).
        Raises ValueError on anything else.
        """
        parts = [p.strip() for p in text.split(",")]
        if len(parts) not in (2, 3):
            raise ValueError(f"Expected 'x,y[,plane]', got {text!r}")
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise ValueError(f"Non-integer coordinate in {text!r}") from None
        return cls(*values)

    def __str__(self) -> str:
        return f"{self.x},{self.y},{self.plane}"
