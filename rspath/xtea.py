"""
Region decryption keys, read from the JSON key file shipped next to a cache.
"""

from __future__ import annotations
import json
import logging
import os
from typing import Dict, NamedTuple, Tuple

from .config import REGION_SIZE, XTEA_KEYS_FILE
from .coordinate import Coordinate
from .errors import KeyFileError

logger = logging.getLogger(__name__)


class XteaKey(NamedTuple):
    """Four-word key for one map region (mapsquare)."""

    mapsquare: int
    key: Tuple[int, int, int, int]

    @property
    def region_x(self) -> int:
        return self.mapsquare >> 8

    @property
    def region_y(self) -> int:
        return self.mapsquare & 0xFF

    @property
    def base(self) -> Coordinate:
        """South-west tile of the region on plane 0."""
        return Coordinate(self.region_x * REGION_SIZE, self.region_y * REGION_SIZE, 0)


def _parse_record(rec) -> XteaKey:
    if not isinstance(rec, dict):
        raise ValueError(f"key record must be an object, got {rec!r}")
    mapsquare = rec["mapsquare"]
    key = rec["key"]
    if isinstance(mapsquare, bool) or not isinstance(mapsquare, int):
        raise ValueError(f"mapsquare must be an integer, got {mapsquare!r}")
    if not 0 <= mapsquare <= 0xFFFF:
        raise ValueError(f"mapsquare {mapsquare} out of range 0..65535")
    if (
        not isinstance(key, list)
        or len(key) != 4
        or not all(isinstance(k, int) and not isinstance(k, bool) for k in key)
    ):
        raise ValueError(f"key for mapsquare {mapsquare} must be four integers")
    return XteaKey(mapsquare, tuple(key))


def load_keys(keys_dir: str) -> Dict[int, XteaKey]:
    """
    Read keys_dir/xteas.json, a JSON array of {"mapsquare": int, "key": [4 ints]}.
    Returns keys by mapsquare. Raises KeyFileError if the file is missing or
    any record is malformed.
    """
    keys_path = os.path.join(keys_dir, XTEA_KEYS_FILE)
    try:
        with open(keys_path, "r") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array of key records")
        keys: Dict[int, XteaKey] = {}
        for rec in data:
            xkey = _parse_record(rec)
            if xkey.mapsquare in keys:
                logger.warning(
                    "Duplicate key for mapsquare %d in %s; using the last one",
                    xkey.mapsquare, keys_path,
                )
            keys[xkey.mapsquare] = xkey
    except (OSError, ValueError, KeyError) as e:
        logger.error("Failed to load region keys from %s: %s", keys_path, e)
        raise KeyFileError(f"Failed to load region keys from {keys_path}: {e}") from e
    logger.info("Loaded %d region keys from %s", len(keys), keys_path)
    return keys
