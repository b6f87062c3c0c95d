# Pathfinding settings
# Maximum distance (tiles, per axis) a search may wander from its start tile.
# 64 gives the 128x128 window of the engine's active map region.
DEFAULT_PATHFINDING_MAX_RANGE = 64

# World layout
# Width/height of one map region ("mapsquare") in tiles
REGION_SIZE = 64
# Highest plane (floor) index; planes run 0..MAX_PLANE
MAX_PLANE = 3

# Collision settings
# Descriptor stored for a tile when the source gives no flag word
BLOCKED_FLAG = 0x100

# Data files
# Filename of the per-region key file (located in the keys directory)
XTEA_KEYS_FILE = "xteas.json"
# Subdirectory of a cache directory holding per-region tile dumps
REGIONS_DIR = "regions"

# Viewer settings
FPS = 30
# Pixel size of one tile
TILE_SIZE = 6
# Tiles shown on each side of the centre tile
VIEW_RADIUS = DEFAULT_PATHFINDING_MAX_RANGE
# Colors
BACKGROUND_COLOR = (30, 30, 30)
BLOCKED_COLOR = (150, 60, 60)
PATH_COLOR = (80, 200, 120)
START_COLOR = (240, 220, 80)
END_COLOR = (80, 160, 240)

# Logging
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
