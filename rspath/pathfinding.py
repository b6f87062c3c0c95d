"""
Pathfinding utilities: implements bounded breadth-first search over the tile grid.
"""
from __future__ import annotations
import enum
import logging
from collections import deque
from typing import Dict, List, Optional, Tuple

from .collision import CollisionMap
from .config import DEFAULT_PATHFINDING_MAX_RANGE
from .coordinate import Coordinate
from .direction import DIRECTIONS, Direction

logger = logging.getLogger(__name__)


class SearchStrategy(enum.Enum):
    """Routing mode of a query."""

    BOUNDED = "bounded"
    # Reserved for obstacle-aware re-planning; runs the bounded search for now.
    SMART = "smart"


def in_range(own, start_tile, max_range=DEFAULT_PATHFINDING_MAX_RANGE):
    """Return True if own lies within max_range tiles of start_tile on both axes."""
    return (
        abs(own[0] - start_tile[0]) <= max_range
        and abs(own[1] - start_tile[1]) <= max_range
    )


def _corner_cut(own: Coordinate, direction: Direction, collision_map: CollisionMap) -> bool:
    """True if a diagonal move squeezes between two blocked orthogonal tiles."""
    side_x = Coordinate(own.x + direction.dx, own.y, own.plane)
    side_y = Coordinate(own.x, own.y + direction.dy, own.plane)
    return collision_map.is_blocked(side_x) and collision_map.is_blocked(side_y)


def get_successors(
    own: Tuple[int, int, int],
    start_tile: Tuple[int, int, int],
    collision_map: CollisionMap,
    max_range: int = DEFAULT_PATHFINDING_MAX_RANGE,
    block_corner_cutting: bool = False,
) -> List[Coordinate]:
    """
    Tiles reachable from own in one move.
    Nothing is reachable from a tile lying outside the search window around
    start_tile, which walls the search off at the window edge. Candidates are
    produced in DIRECTIONS order and kept when not blocked. Diagonals are
    judged on the destination tile alone unless block_corner_cutting is set.
    """
    own = Coordinate(*own)
    if not in_range(own, start_tile, max_range):
        return []

    successors = []
    for direction in DIRECTIONS:
        candidate = own.step(direction)
        if collision_map.is_blocked(candidate):
            continue
        if (
            block_corner_cutting
            and direction.is_diagonal
            and _corner_cut(own, direction, collision_map)
        ):
            continue
        successors.append(candidate)
    return successors


def _reconstruct_path(
    came_from: Dict[Coordinate, Optional[Coordinate]], current: Coordinate
) -> List[Coordinate]:
    path = [current]
    parent = came_from[current]
    while parent is not None:
        path.append(parent)
        parent = came_from[parent]
    path.reverse()
    return path


def find_path(
    start: Tuple[int, int, int],
    end: Tuple[int, int, int],
    collision_map: CollisionMap,
    max_range: int = DEFAULT_PATHFINDING_MAX_RANGE,
    block_corner_cutting: bool = False,
) -> Optional[List[Coordinate]]:
    """
    Find a shortest path (fewest moves) from start to end.
    start, end: (x, y, plane) tiles.
    collision_map: blocked tiles; anything absent is walkable.
    Returns the list of tiles from start to end inclusive, or None if end
    cannot be reached inside the search window. Start and end themselves are
    never rejected for being blocked.
    """
    if max_range <= 0:
        raise ValueError(f"max_range must be positive, got {max_range}")
    start = Coordinate(*start)
    end = Coordinate(*end)

    # Parent of every discovered tile; doubles as the visited set
    came_from: Dict[Coordinate, Optional[Coordinate]] = {start: None}
    frontier = deque([start])
    expanded = 0

    while frontier:
        current = frontier.popleft()
        if current == end:
            path = _reconstruct_path(came_from, current)
            logger.debug(
                "Path %s -> %s: %d tiles, %d expanded",
                start, end, len(path), expanded,
            )
            return path

        expanded += 1
        for neighbor in get_successors(
            current, start, collision_map, max_range, block_corner_cutting
        ):
            if neighbor in came_from:
                continue
            came_from[neighbor] = current
            frontier.append(neighbor)

    # Frontier exhausted
    logger.debug("No path %s -> %s, %d expanded", start, end, expanded)
    return None


class Pathfinder:
    """
    Route queries against a collision map.

    Holds no search state, so one instance (and one map) can serve any
    number of queries, including from several threads once the map is built.
    """

    def __init__(
        self,
        collision_map: Optional[CollisionMap] = None,
        max_range: int = DEFAULT_PATHFINDING_MAX_RANGE,
        block_corner_cutting: bool = False,
    ) -> None:
        """
        collision_map: map used when a query does not pass its own.
        max_range: search window half-width in tiles.
        block_corner_cutting: forbid diagonals between two blocked tiles.
        """
        if max_range <= 0:
            raise ValueError(f"max_range must be positive, got {max_range}")
        self.collision_map = collision_map
        self.max_range = max_range
        self.block_corner_cutting = block_corner_cutting

    @classmethod
    def from_cache(
        cls,
        cache_path: str,
        keys_dir: str,
        region_loader=None,
        **kwargs,
    ) -> Pathfinder:
        """
        Build a pathfinder whose map is loaded from a game cache directory and
        the region key file in keys_dir. Raises a CacheLoadError subclass if
        anything cannot be loaded.
        """
        from .cache import load_collision_map

        collision_map = load_collision_map(cache_path, keys_dir, region_loader)
        return cls(collision_map, **kwargs)

    def search(
        self,
        start: Tuple[int, int, int],
        end: Tuple[int, int, int],
        collision_map: Optional[CollisionMap] = None,
        strategy: SearchStrategy = SearchStrategy.BOUNDED,
    ) -> Optional[List[Coordinate]]:
        """Run one query with the given strategy; see find_path()."""
        cmap = collision_map if collision_map is not None else self.collision_map
        if cmap is None:
            raise ValueError("No collision map given and none loaded")
        # SMART has no separate algorithm yet
        return find_path(
            start,
            end,
            cmap,
            max_range=self.max_range,
            block_corner_cutting=self.block_corner_cutting,
        )

    def find_path(self, start, end, collision_map=None):
        """Shortest path from start to end inside the search window, or None."""
        return self.search(start, end, collision_map, SearchStrategy.BOUNDED)

    def find_path_smart(self, start, end, collision_map=None):
        """Smart routing entry point; currently identical to find_path()."""
        return self.search(start, end, collision_map, SearchStrategy.SMART)
