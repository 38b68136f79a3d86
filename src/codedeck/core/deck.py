"""Deck generation pipeline.

:class:`DeckBuilder` turns an already validated word list into a saved
deck:

1. Plan the near-square grid for the word count.
2. Tile the front and back templates across the grid.
3. Draw each word into its tile on the front sheet.
4. Save both sheets through the :class:`~codedeck.core.store.DeckStore`.

The builder holds only read-only state, so one instance serves every
request and may be called from several threads at once.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from PIL import Image

from codedeck.core.compositor import tile_template
from codedeck.core.errors import EncodeOrWriteFailure
from codedeck.core.layout import GridLayout, plan_grid
from codedeck.core.overlay import TextBox, draw_words
from codedeck.core.resources import DeckResources
from codedeck.core.store import DeckArtifact, DeckStore

logger = logging.getLogger(__name__)

# URL path the deck directory is mounted at.
DECK_URL_PATH = "deck"


@dataclass(frozen=True)
class DeckResult:
    """Outcome of a successful build.

    Attributes:
        artifact: The saved front/back pair.
        layout: Grid the cards were laid out on.
        num_cards: Number of words rendered.
    """

    artifact: DeckArtifact
    layout: GridLayout
    num_cards: int


class DeckBuilder:
    """Renders and saves decks from word lists.

    Args:
        resources: Loaded templates and font.
        store: Destination for finished sheets.
        text_box: Where words go inside each tile.
        text_color: RGBA fill colour for words.
    """

    def __init__(
        self,
        resources: DeckResources,
        store: DeckStore,
        *,
        text_box: TextBox,
        text_color: tuple[int, int, int, int] = (0, 0, 0, 255),
    ) -> None:
        self.resources = resources
        self.store = store
        self.text_box = text_box
        self.text_color = text_color

    def build(self, words: Sequence[str]) -> DeckResult:
        """Render *words* onto a front/back sheet pair and save it.

        Args:
            words: Non-empty, validated card words.

        Returns:
            The :class:`DeckResult` describing the saved deck.

        Raises:
            EncodeOrWriteFailure: If composing or saving either sheet fails.
        """
        layout = plan_grid(len(words))
        tile_size = self.resources.tile_size

        try:
            front = tile_template(self.resources.front, layout)
            back = tile_template(self.resources.back, layout)
            draw_words(
                front,
                layout,
                words,
                self.resources.font,
                tile_size=tile_size,
                text_box=self.text_box,
                color=self.text_color,
            )
        except (Image.DecompressionBombError, ValueError, OSError) as exc:
            raise EncodeOrWriteFailure(f"Could not compose a {layout.columns}x{layout.rows} deck: {exc}") from exc

        artifact = self.store.save(front, back)
        logger.info(
            "Built deck %s: %d cards on a %dx%d grid (%dx%d px).",
            artifact.deck_id,
            len(words),
            layout.columns,
            layout.rows,
            front.width,
            front.height,
        )
        return DeckResult(artifact=artifact, layout=layout, num_cards=len(words))


def deck_url(root_url: str, filename: str) -> str:
    """Return the public URL of a deck file served under ``/deck``."""
    return f"{root_url.rstrip('/')}/{DECK_URL_PATH}/{filename}"


def build_deck_urls(root_url: str, artifact: DeckArtifact) -> tuple[str, str]:
    """Return the ``(front, back)`` public URLs of *artifact*."""
    return (
        deck_url(root_url, artifact.front_filename),
        deck_url(root_url, artifact.back_filename),
    )
