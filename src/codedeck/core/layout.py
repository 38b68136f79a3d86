"""Grid layout for card sheets.

Tabletop Simulator rejects sheets with a very large width or height, so
cards are laid out on a grid that is as close to square as possible:

    columns = floor(sqrt(N))
    rows    = ceil(N / columns)

Because ``columns ** 2 <= N`` the grid is never wider than it is tall, and
``columns * rows >= N`` always holds.  Cards fill the grid row-major; any
slots past the last card stay empty.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class GridLayout:
    """Arrangement of card tiles on a sheet.

    Attributes:
        columns: Tiles per row.
        rows: Tiles per column.
    """

    columns: int
    rows: int

    @property
    def capacity(self) -> int:
        """Number of tile slots on the sheet."""
        return self.columns * self.rows

    def tile_position(self, index: int) -> tuple[int, int]:
        """Return the ``(col, row)`` of tile *index*, read row-major."""
        if not 0 <= index < self.capacity:
            raise IndexError(f"tile index {index} outside a {self.columns}x{self.rows} grid")
        return index % self.columns, index // self.columns

    def canvas_size(self, tile_size: tuple[int, int]) -> tuple[int, int]:
        """Return the pixel size of a sheet built from tiles of *tile_size*."""
        width, height = tile_size
        return width * self.columns, height * self.rows


def plan_grid(num_cards: int) -> GridLayout:
    """Compute the near-square grid for *num_cards* cards.

    The caller guarantees ``num_cards >= 1``; the request validator's minimum
    word count is what enforces it.  With zero cards there is no column to
    divide by.

    Args:
        num_cards: Number of cards on the sheet.

    Returns:
        The :class:`GridLayout` for the sheet.
    """
    columns = math.isqrt(num_cards)
    rows = math.ceil(num_cards / columns)
    return GridLayout(columns=columns, rows=rows)


def tile_origin(index: int, layout: GridLayout, tile_size: tuple[int, int]) -> tuple[int, int]:
    """Return the top-left pixel of tile *index* on the sheet."""
    col, row = layout.tile_position(index)
    width, height = tile_size
    return col * width, row * height
