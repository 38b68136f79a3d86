"""Word rendering onto the front sheet.

Words are drawn at a fixed size and colour from the top-left corner of a
fixed text box, offset into each word's tile.  Words are not measured for layout:
there is no centering, wrapping, or shrinking, and a word wider than the box simply
runs on into whatever pixels lie to its right, including the next tile.
Characters that would start past the right edge of the canvas are dropped
before drawing.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from PIL import Image, ImageDraw, ImageFont

from codedeck.core.layout import GridLayout, tile_origin


@dataclass(frozen=True)
class TextBox:
    """Text rectangle in template-local pixel coordinates."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def origin(self) -> tuple[int, int]:
        return self.x0, self.y0


def visible_prefix(
    word: str,
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    available: int,
) -> str:
    """Return the part of *word* that can land within *available* pixels.

    The result keeps every character whose pen position starts inside the
    available width, so the last glyph may still be cut off by the canvas
    edge.  Words that fit are returned unchanged.
    """
    if available <= 0:
        return ""
    if font.getlength(word) <= available:
        return word

    # Largest prefix whose advance still fits, by bisection.
    low, high = 0, len(word)
    while low < high:
        middle = (low + high + 1) // 2
        if font.getlength(word[:middle]) <= available:
            low = middle
        else:
            high = middle - 1
    return word[: low + 1]


def draw_words(
    canvas: Image.Image,
    layout: GridLayout,
    words: Sequence[str],
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont,
    *,
    tile_size: tuple[int, int],
    text_box: TextBox,
    color: tuple[int, int, int, int] = (0, 0, 0, 255),
) -> None:
    """Draw each word into its tile on *canvas*, in place.

    Word ``i`` goes to tile ``i`` read row-major, at
    ``tile_origin(i) + text_box.origin``.  Tiles past ``len(words) - 1`` are
    left untouched.  Words running past the right edge of the canvas are
    cut to :func:`visible_prefix`.

    Args:
        canvas: Front sheet produced by :func:`~codedeck.core.compositor.tile_template`.
        layout: Grid the sheet was built with.
        words: Card words in order.
        font: Font used for every word.
        tile_size: ``(width, height)`` of one template tile.
        text_box: Text rectangle inside a tile.
        color: RGBA fill colour.
    """
    draw = ImageDraw.Draw(canvas)
    for index, word in enumerate(words):
        tile_x, tile_y = tile_origin(index, layout, tile_size)
        x = tile_x + text_box.x0
        draw.text(
            (x, tile_y + text_box.y0),
            visible_prefix(word, font, canvas.width - x),
            font=font,
            fill=color,
        )
