import json

import pytest

from rspath.cache import (
    CacheNotFoundError,
    JsonRegionLoader,
    KeyFileError,
    RegionDecodeError,
    load_collision_map,
)
from rspath.coordinate import Coordinate
from rspath.pathfinding import Pathfinder
from rspath.xtea import XteaKey


@pytest.fixture
def cache_dirs(tmp_path):
    """A cache with one region dump and a key file listing two regions."""
    cache = tmp_path / "cache"
    (cache / "regions").mkdir(parents=True)
    keys = tmp_path / "keys"
    keys.mkdir()
    (keys / "xteas.json").write_text(
        json.dumps(
            [
                {"mapsquare": 12850, "key": [1, 2, 3, 4]},
                {"mapsquare": 12851, "key": [5, 6, 7, 8]},
            ]
        )
    )
    # Wall at local x=5 across the whole region, plus one tile on plane 1
    tiles = [{"x": 5, "y": y, "flags": 256} for y in range(64)]
    tiles.append({"x": 0, "y": 0, "plane": 1, "flags": 2097152})
    (cache / "regions" / "12850.json").write_text(json.dumps({"tiles": tiles}))
    return cache, keys


def test_region_loader_world_coordinates(cache_dirs):
    cache, _ = cache_dirs
    loader = JsonRegionLoader(str(cache))
    tiles = dict(loader.load_region(XteaKey(12850, (1, 2, 3, 4))))
    assert len(tiles) == 65
    assert tiles[Coordinate(3205, 3200, 0)] == 256
    assert tiles[Coordinate(3205, 3263, 0)] == 256
    assert tiles[Coordinate(3200, 3200, 1)] == 2097152


def test_region_loader_missing_region_is_empty(cache_dirs):
    cache, _ = cache_dirs
    loader = JsonRegionLoader(str(cache))
    assert list(loader.load_region(XteaKey(12851, (5, 6, 7, 8)))) == []


@pytest.mark.parametrize(
    "content",
    [
        "{",
        json.dumps([]),
        json.dumps({"tiles": [{"x": 64, "y": 0}]}),
        json.dumps({"tiles": [{"x": 0, "y": -1}]}),
        json.dumps({"tiles": [{"x": 0, "y": 0, "plane": 4}]}),
        json.dumps({"tiles": [{"y": 0}]}),
    ],
)
def test_region_loader_malformed(cache_dirs, content):
    cache, _ = cache_dirs
    (cache / "regions" / "12850.json").write_text(content)
    loader = JsonRegionLoader(str(cache))
    with pytest.raises(RegionDecodeError):
        loader.load_region(XteaKey(12850, (1, 2, 3, 4)))


def test_load_collision_map(cache_dirs):
    cache, keys = cache_dirs
    cmap = load_collision_map(str(cache), str(keys))
    assert len(cmap) == 65
    assert cmap.is_blocked((3205, 3230, 0))
    assert not cmap.is_blocked((3204, 3230, 0))


def test_load_with_custom_region_loader(cache_dirs):
    cache, keys = cache_dirs
    seen = []

    class FakeLoader:
        def load_region(self, key):
            seen.append(key.mapsquare)
            return [(key.base, 1)]

    cmap = load_collision_map(str(cache), str(keys), FakeLoader())
    assert seen == [12850, 12851]
    assert set(cmap) == {(3200, 3200, 0), (3200, 3264, 0)}


def test_later_region_wins_on_overlap(cache_dirs):
    cache, keys = cache_dirs

    class OverlapLoader:
        def load_region(self, key):
            # Both regions report the same tile with their own flag word
            return [(Coordinate(3200, 3200, 0), key.mapsquare)]

    cmap = load_collision_map(str(cache), str(keys), OverlapLoader())
    assert len(cmap) == 1
    assert cmap.flags((3200, 3200, 0)) == 12851


def test_missing_cache(tmp_path, cache_dirs):
    _, keys = cache_dirs
    with pytest.raises(CacheNotFoundError):
        load_collision_map(str(tmp_path / "nowhere"), str(keys))


def test_missing_keys(cache_dirs, tmp_path):
    cache, _ = cache_dirs
    with pytest.raises(KeyFileError):
        load_collision_map(str(cache), str(tmp_path / "nokeys"))


def test_pathfinder_from_cache_routes_around_wall(cache_dirs):
    cache, keys = cache_dirs
    pf = Pathfinder.from_cache(str(cache), str(keys))
    start = (3203, 3230, 0)
    end = (3207, 3230, 0)
    # The wall spans the whole region (y 3200..3263) and is open beyond it
    path = pf.find_path(start, end)
    assert path is not None
    assert path[0] == start and path[-1] == end
    assert not any(pf.collision_map.is_blocked(c) for c in path)
    assert any(c[1] > 3263 or c[1] < 3200 for c in path)


def test_pathfinder_from_cache_error_propagates(tmp_path):
    with pytest.raises(CacheNotFoundError):
        Pathfinder.from_cache(str(tmp_path / "missing"), str(tmp_path))
