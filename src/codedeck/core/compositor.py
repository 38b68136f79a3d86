"""Sheet composition: tiling a card template across a grid."""

from __future__ import annotations

from PIL import Image

from codedeck.core.layout import GridLayout


def tile_template(template: Image.Image, layout: GridLayout) -> Image.Image:
    """Build a sheet by repeating *template* over every slot of *layout*.

    Each ``template.width x template.height`` block of the result is a
    verbatim copy of the template: no blending, scaling, or borders.  Slots
    beyond the last card are filled too, so unused slots show the bare
    template.

    Args:
        template: RGBA card template.
        layout: Grid to fill.

    Returns:
        A new RGBA image of size ``layout.canvas_size(template.size)``.
    """
    canvas = Image.new("RGBA", layout.canvas_size(template.size))
    for row in range(layout.rows):
        for col in range(layout.columns):
            canvas.paste(template, (col * template.width, row * template.height))
    return canvas
