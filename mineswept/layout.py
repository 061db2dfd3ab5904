"""Screen geometry: the fixed game canvas, window scaling and grid placement."""

from __future__ import annotations

import math
from dataclasses import dataclass

GAME_SCREEN_WIDTH = 960
GAME_SCREEN_HEIGHT = 540
WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080

MENU_HEIGHT = 30
STATS_HEIGHT = 30
GRID_PADDING = 20
_VERTICAL_RESERVED = MENU_HEIGHT + STATS_HEIGHT + GRID_PADDING * 2


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle on the game canvas."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def contains(self, x: float, y: float) -> bool:
        """Whether the point lies inside; the right and bottom edges are excluded."""
        return self.x <= x < self.right and self.y <= y < self.bottom


def window_scale(width: float, height: float) -> float:
    """Factor by which the game canvas is scaled to fit a window, keeping its aspect."""
    if width <= 0 or height <= 0:
        raise ValueError(f"window size must be positive, got {width}x{height}")
    return min(width / GAME_SCREEN_WIDTH, height / GAME_SCREEN_HEIGHT)


def screen_to_game(x: float, y: float, width: float, height: float) -> tuple[float, float]:
    """Map a window position to canvas coordinates, allowing for letterboxing."""
    scale = window_scale(width, height)
    game_x = (x - (width - GAME_SCREEN_WIDTH * scale) * 0.5) / scale
    game_y = (y - (height - GAME_SCREEN_HEIGHT * scale) * 0.5) / scale
    return game_x, game_y


@dataclass(frozen=True)
class GridLayout:
    """Where the minefield sits on the canvas and how large its cells are."""

    grid_size: int
    cell_size: float
    offset_x: float
    offset_y: float

    @classmethod
    def for_grid(cls, grid_size: int) -> GridLayout:
        """The largest square cells that fit, centred below the menu and stats bar."""
        if grid_size < 1:
            raise ValueError(f"grid size must be positive, got {grid_size}")
        usable_height = GAME_SCREEN_HEIGHT - _VERTICAL_RESERVED
        cell_size = min(GAME_SCREEN_WIDTH / grid_size, usable_height / grid_size)
        total = cell_size * grid_size
        offset_x = (GAME_SCREEN_WIDTH - total) / 2
        offset_y = MENU_HEIGHT + STATS_HEIGHT + GRID_PADDING + (usable_height - total) / 2
        return cls(grid_size, cell_size, offset_x, offset_y)

    @property
    def extent(self) -> float:
        """Width and height of the whole grid."""
        return self.cell_size * self.grid_size

    @property
    def bounds(self) -> Rect:
        return Rect(self.offset_x, self.offset_y, self.extent, self.extent)

    def contains(self, x: float, y: float) -> bool:
        """Whether a canvas point falls on the grid."""
        return self.bounds.contains(x, y)

    def cell_at(self, x: float, y: float) -> tuple[int, int] | None:
        """The (row, col) under a canvas point, or None off the grid."""
        if not self.contains(x, y):
            return None
        last = self.grid_size - 1
        col = min(last, math.floor((x - self.offset_x) / self.cell_size))
        row = min(last, math.floor((y - self.offset_y) / self.cell_size))
        return row, col

    def cell_rect(self, row: int, col: int) -> Rect:
        """The canvas rectangle covered by a cell."""
        return Rect(
            self.offset_x + col * self.cell_size,
            self.offset_y + row * self.cell_size,
            self.cell_size,
            self.cell_size,
        )