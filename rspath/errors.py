"""
Failure kinds raised while building a collision map from game data.
A search never raises these; an unreachable goal is a normal result.
"""


class CacheLoadError(RuntimeError):
    """Base class for every data-loading failure."""


class CacheNotFoundError(CacheLoadError):
    """The game cache path does not exist or is not a directory."""


class KeyFileError(CacheLoadError):
    """The region key file is missing or malformed."""


class RegionDecodeError(CacheLoadError):
    """A region's tile data could not be decoded."""


class CollisionMapError(CacheLoadError):
    """A collision dump could not be read or written."""
