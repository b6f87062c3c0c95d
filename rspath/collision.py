"""
Collision map: which tiles of the world are blocked.
"""

from __future__ import annotations
import json
import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional, Tuple

import numpy as np

from .config import BLOCKED_FLAG
from .coordinate import Coordinate
from .errors import CollisionMapError

logger = logging.getLogger(__name__)


class CollisionMap:
    """
    Sparse map from tile to blocking descriptor (flag word).

    A tile with an entry is blocked; a tile without one is walkable. The map
    is filled once at construction and never changes afterwards, so any
    number of searches may read it at the same time.
    """

    def __init__(
        self, tiles: Optional[Mapping[Tuple[int, int, int], int]] = None
    ) -> None:
        self._tiles = {
            Coordinate(*coord): int(flags) for coord, flags in (tiles or {}).items()
        }

    @classmethod
    def from_blocked(
        cls, coords: Iterable[Tuple[int, int, int]], flags: int = BLOCKED_FLAG
    ) -> CollisionMap:
        """Build a map blocking every tile in coords with the same descriptor."""
        return cls({coord: flags for coord in coords})

    @classmethod
    def merge(cls, *maps: CollisionMap) -> CollisionMap:
        """Combine several maps; later maps win where tiles overlap."""
        tiles = {}
        for cmap in maps:
            tiles.update(cmap.tiles)
        return cls(tiles)

    @property
    def tiles(self) -> Mapping[Coordinate, int]:
        """Read-only view of the blocked tiles."""
        return MappingProxyType(self._tiles)

    def is_blocked(self, coord: Tuple[int, int, int]) -> bool:
        """Return True if coord has an entry (is not freely walkable)."""
        return coord in self._tiles

    def flags(self, coord: Tuple[int, int, int]) -> Optional[int]:
        """Return the descriptor stored for coord, or None if walkable."""
        return self._tiles.get(coord)

    def window(self, center: Coordinate, radius: int) -> np.ndarray:
        """
        Blocked state of the square around center on its plane.
        Indexed [dy + radius, dx + radius]; row 0 is the southernmost row.
        """
        size = 2 * radius + 1
        grid = np.zeros((size, size), dtype=bool)
        for x, y, plane in self._tiles:
            if plane != center.plane:
                continue
            dx = x - center.x
            dy = y - center.y
            if -radius <= dx <= radius and -radius <= dy <= radius:
                grid[dy + radius, dx + radius] = True
        return grid

    def __contains__(self, coord: object) -> bool:
        return coord in self._tiles

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._tiles)

    def __repr__(self) -> str:
        return f"<CollisionMap blocked={len(self._tiles)}>"

    @classmethod
    def load(cls, path: str) -> CollisionMap:
        """
        Read a collision dump: {"tiles": [{"x", "y", "plane", "flags"}, ...]}.
        "plane" defaults to 0 and "flags" to BLOCKED_FLAG.
        """
        try:
            with open(path, "r") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("expected an object with a 'tiles' list")
            records = data["tiles"]
            if not isinstance(records, list):
                raise ValueError("expected an object with a 'tiles' list")
            tiles = {}
            for rec in records:
                coord = Coordinate(
                    int(rec["x"]), int(rec["y"]), int(rec.get("plane", 0))
                )
                tiles[coord] = int(rec.get("flags", BLOCKED_FLAG))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Failed to load collision map from %s: %s", path, e)
            raise CollisionMapError(
                f"Failed to load collision map from {path}: {e}"
            ) from e
        logger.info("Loaded %d blocked tiles from %s", len(tiles), path)
        return cls(tiles)

    def dump(self, path: str) -> None:
        """Write the map in the format read by load()."""
        records = [
            {"x": c.x, "y": c.y, "plane": c.plane, "flags": flags}
            for c, flags in sorted(self._tiles.items())
        ]
        try:
            with open(path, "w") as f:
                json.dump({"tiles": records}, f)
        except OSError as e:
            logger.error("Failed to write collision map to %s: %s", path, e)
            raise CollisionMapError(
                f"Failed to write collision map to {path}: {e}"
            ) from e
