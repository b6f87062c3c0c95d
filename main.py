import argparse
import logging
import sys

from rspath.collision import CollisionMap
from rspath.config import DEFAULT_PATHFINDING_MAX_RANGE, LOG_FORMAT
from rspath.coordinate import Coordinate
from rspath.errors import CacheLoadError
from rspath.pathfinding import Pathfinder

logger = logging.getLogger("rspath")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Find a walkable tile path between two coordinates."
    )
    parser.add_argument("start", type=Coordinate.from_string, help="start tile x,y[,plane]")
    parser.add_argument("end", type=Coordinate.from_string, help="end tile x,y[,plane]")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--map", help="collision dump (JSON)")
    source.add_argument("--cache", help="game cache directory (needs --keys)")
    parser.add_argument("--keys", help="directory containing xteas.json")
    parser.add_argument(
        "--max-range",
        type=int,
        default=DEFAULT_PATHFINDING_MAX_RANGE,
        help="search window half-width in tiles",
    )
    parser.add_argument(
        "--block-corner-cutting",
        action="store_true",
        help="forbid diagonal moves between two blocked tiles",
    )
    parser.add_argument("--show", action="store_true", help="open the debug viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)
    if args.cache and not args.keys:
        parser.error("--cache requires --keys")
    if args.max_range <= 0:
        parser.error("--max-range must be positive")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT
    )
    options = dict(
        max_range=args.max_range, block_corner_cutting=args.block_corner_cutting
    )
    try:
        if args.cache:
            pathfinder = Pathfinder.from_cache(args.cache, args.keys, **options)
        else:
            pathfinder = Pathfinder(CollisionMap.load(args.map), **options)
    except CacheLoadError as e:
        logger.error("Could not load collision data: %s", e)
        return 2

    path = pathfinder.find_path(args.start, args.end)
    if path is None:
        print("no path")
    else:
        for coord in path:
            print(coord)

    if args.show:
        # Imported lazily so headless runs never touch the display
        from rspath.viewer import PathViewer

        PathViewer(pathfinder.collision_map, args.start, path).run()
    return 0 if path is not None else 1


if __name__ == "__main__":
    sys.exit(main())
