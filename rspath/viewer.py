"""
Debug viewer: draws a collision window and a path with Pygame.
"""

from __future__ import annotations
import pygame
from typing import Optional, Sequence, Tuple

from .collision import CollisionMap
from .config import (
    BACKGROUND_COLOR,
    BLOCKED_COLOR,
    END_COLOR,
    FPS,
    PATH_COLOR,
    START_COLOR,
    TILE_SIZE,
    VIEW_RADIUS,
)
from .coordinate import Coordinate


def tile_to_screen(
    coord: Coordinate, center: Coordinate, radius: int, tile_size: int
) -> Tuple[int, int]:
    """Top-left pixel of coord's cell; north is up."""
    col = coord.x - center.x + radius
    row = radius - (coord.y - center.y)
    return col * tile_size, row * tile_size


def render_window(
    surface: pygame.Surface,
    collision_map: CollisionMap,
    center: Coordinate,
    path: Optional[Sequence[Coordinate]] = None,
    radius: int = VIEW_RADIUS,
    tile_size: int = TILE_SIZE,
) -> None:
    """Draw blocked tiles around center, then the path over them."""
    surface.fill(BACKGROUND_COLOR)
    grid = collision_map.window(center, radius)
    size = 2 * radius + 1
    for gy, gx in zip(*grid.nonzero()):
        # grid row 0 is the south edge; screen row 0 is the north edge
        row = size - 1 - int(gy)
        rect = (int(gx) * tile_size, row * tile_size, tile_size, tile_size)
        pygame.draw.rect(surface, BLOCKED_COLOR, rect)
    if not path:
        return
    for i, coord in enumerate(path):
        if coord.plane != center.plane:
            continue
        if i == 0:
            color = START_COLOR
        elif i == len(path) - 1:
            color = END_COLOR
        else:
            color = PATH_COLOR
        px, py = tile_to_screen(coord, center, radius, tile_size)
        pygame.draw.rect(surface, color, (px, py, tile_size, tile_size))


class PathViewer:
    """Window showing one map and one path until closed (window close, X or Escape)."""

    def __init__(
        self,
        collision_map: CollisionMap,
        center: Coordinate,
        path: Optional[Sequence[Coordinate]] = None,
        radius: int = VIEW_RADIUS,
        tile_size: int = TILE_SIZE,
    ) -> None:
        self.collision_map = collision_map
        self.center = center
        self.path = path
        self.radius = radius
        self.tile_size = tile_size
        self.running = True

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key in (
                pygame.K_x,
                pygame.K_ESCAPE,
            ):
                self.running = False

    def run(self) -> None:
        """Main loop: handle events and redraw."""
        pygame.init()
        side = (2 * self.radius + 1) * self.tile_size
        screen = pygame.display.set_mode((side, side))
        pygame.display.set_caption(f"Path around {self.center}")
        clock = pygame.time.Clock()
        while self.running:
            clock.tick(FPS)
            self.handle_events()
            render_window(
                screen,
                self.collision_map,
                self.center,
                self.path,
                self.radius,
                self.tile_size,
            )
            pygame.display.flip()
        pygame.quit()
