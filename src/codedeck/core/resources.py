"""Shared, read-only deck assets.

The two card templates and the font are decoded once, when the application
starts, and handed to every request afterwards.  Nothing in here is mutated
after loading, so a single :class:`DeckResources` is safely shared between
the worker threads that render decks.

Usage
-----
::

    from codedeck.core.config import config
    from codedeck.core.resources import DeckResources

    resources = DeckResources.load(config)
    print(resources.tile_size)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, ImageFont

from codedeck.core.config import CodedeckConfig
from codedeck.core.errors import ResourceLoadFailure

logger = logging.getLogger(__name__)


def load_template(path: Path) -> Image.Image:
    """Decode a card template into an RGBA image.

    Args:
        path: PNG (or any format Pillow can read) on disk.

    Returns:
        The fully loaded RGBA image, detached from the file.

    Raises:
        ResourceLoadFailure: If the file is missing or cannot be decoded.
    """
    try:
        with Image.open(path) as image:
            image.load()
            return image.convert("RGBA")
    except (OSError, ValueError) as exc:
        raise ResourceLoadFailure(f"Could not load template '{path}': {exc}") from exc


def load_font(path: Path | None, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load the card font at a fixed pixel *size*.

    Args:
        path: TrueType/OpenType font file, or ``None`` for Pillow's bundled
            default font.
        size: Font size in pixels.

    Raises:
        ResourceLoadFailure: If the font file cannot be read.
    """
    try:
        if path is None:
            return ImageFont.load_default(size=size)
        return ImageFont.truetype(str(path), size=size)
    except (OSError, ValueError) as exc:
        raise ResourceLoadFailure(f"Could not load font '{path}': {exc}") from exc


@dataclass(frozen=True)
class DeckResources:
    """Decoded templates and font shared by all requests.

    Attributes:
        front: Template tiled across the front sheet.
        back: Template tiled across the back sheet.
        font: Font used to draw the words.
    """

    front: Image.Image
    back: Image.Image
    font: ImageFont.FreeTypeFont | ImageFont.ImageFont

    @property
    def tile_size(self) -> tuple[int, int]:
        """``(width, height)`` of a single card."""
        return self.front.size

    @classmethod
    def load(cls, config: CodedeckConfig) -> DeckResources:
        """Load both templates and the font described by *config*.

        Raises:
            ResourceLoadFailure: If any asset cannot be loaded, or if the
                front and back templates differ in size (the two sheets
                must line up card for card).
        """
        front = load_template(config.front_template)
        back = load_template(config.back_template)
        if front.size != back.size:
            raise ResourceLoadFailure(
                f"Front template is {front.size[0]}x{front.size[1]} but back template "
                f"is {back.size[0]}x{back.size[1]}"
            )
        font = load_font(config.font_path, config.font_size)

        logger.info(
            "Loaded card templates (%dx%d) and font '%s' at %dpx.",
            front.width,
            front.height,
            config.font_path or "default",
            config.font_size,
        )
        return cls(front=front, back=back, font=font)
