"""
Building a collision map from a game cache directory.

The cache layout read here is a directory holding one JSON tile dump per
region, produced by an external exporter:

    <cache>/regions/<mapsquare>.json
        {"tiles": [{"x": 0-63, "y": 0-63, "plane": 0-3, "flags": int}, ...]}

Coordinates inside a dump are local to the region. Other cache formats plug in
through the RegionLoader protocol.
"""

from __future__ import annotations
import json
import logging
import os
from typing import Iterable, Iterator, Optional, Protocol, Tuple

from .collision import CollisionMap
from .config import BLOCKED_FLAG, MAX_PLANE, REGION_SIZE, REGIONS_DIR
from .coordinate import Coordinate
from .errors import (
    CacheLoadError,
    CacheNotFoundError,
    CollisionMapError,
    KeyFileError,
    RegionDecodeError,
)
from .xtea import XteaKey, load_keys

__all__ = [
    "CacheLoadError",
    "CacheNotFoundError",
    "CollisionMapError",
    "KeyFileError",
    "RegionDecodeError",
    "RegionLoader",
    "JsonRegionLoader",
    "load_collision_map",
]

logger = logging.getLogger(__name__)


class RegionLoader(Protocol):
    """Produces the blocked tiles of one region, in world coordinates."""

    def load_region(self, key: XteaKey) -> Iterable[Tuple[Coordinate, int]]:
        ...


class JsonRegionLoader:
    """Reads per-region JSON tile dumps from a cache directory."""

    def __init__(self, cache_path: str) -> None:
        self.cache_path = cache_path

    def region_path(self, mapsquare: int) -> str:
        return os.path.join(self.cache_path, REGIONS_DIR, f"{mapsquare}.json")

    def load_region(self, key: XteaKey) -> Iterator[Tuple[Coordinate, int]]:
        path = self.region_path(key.mapsquare)
        if not os.path.exists(path):
            # Regions without map data (open sea, unused squares) have no dump
            logger.debug("No tile dump for mapsquare %d", key.mapsquare)
            return iter(())
        try:
            with open(path, "r") as f:
                data = json.load(f)
            records = data["tiles"]
            tiles = [self._decode(rec, key) for rec in records]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error(
                "Failed to decode mapsquare %d from %s: %s", key.mapsquare, path, e
            )
            raise RegionDecodeError(
                f"Failed to decode mapsquare {key.mapsquare} from {path}: {e}"
            ) from e
        return iter(tiles)

    @staticmethod
    def _decode(rec, key: XteaKey) -> Tuple[Coordinate, int]:
        lx = int(rec["x"])
        ly = int(rec["y"])
        plane = int(rec.get("plane", 0))
        if not (0 <= lx < REGION_SIZE and 0 <= ly < REGION_SIZE):
            raise ValueError(f"local tile ({lx}, {ly}) outside region")
        if not 0 <= plane <= MAX_PLANE:
            raise ValueError(f"plane {plane} out of range")
        base = key.base
        return (
            Coordinate(base.x + lx, base.y + ly, plane),
            int(rec.get("flags", BLOCKED_FLAG)),
        )


def load_collision_map(
    cache_path: str,
    keys_dir: str,
    region_loader: Optional[RegionLoader] = None,
) -> CollisionMap:
    """
    Load every region listed in the key file into one CollisionMap.
    region_loader defaults to a JsonRegionLoader over cache_path.
    """
    if not os.path.isdir(cache_path):
        logger.error("Game cache not found at %s", cache_path)
        raise CacheNotFoundError(f"Game cache not found at {cache_path}")
    keys = load_keys(keys_dir)
    loader = region_loader or JsonRegionLoader(cache_path)

    regions = [
        CollisionMap(dict(loader.load_region(keys[mapsquare])))
        for mapsquare in sorted(keys)
    ]
    collision_map = CollisionMap.merge(*regions)
    logger.info(
        "Loaded collision map: %d regions, %d blocked tiles",
        len(keys), len(collision_map),
    )
    return collision_map
