"""Core functionality for deck generation.

This module provides the pieces the HTTP layer strings together:

- **parse_words**: request body -> validated word list
- **plan_grid / GridLayout**: near-square card grid for a word count
- **tile_template**: sheet built from a repeated card template
- **draw_words**: words drawn into their tiles on the front sheet
- **DeckResources**: templates and font, loaded once
- **DeckStore**: UUID-named PNG pairs on disk
- **DeckBuilder**: the full render-and-save pipeline
- **CodedeckConfig / config**: Pydantic Settings configuration

Usage Example
-------------
::

    from codedeck.core import DeckBuilder, DeckResources, DeckStore, TextBox, config, parse_words

    words = parse_words(body, min_words=config.min_words, max_words=config.max_words)
    builder = DeckBuilder(
        DeckResources.load(config),
        DeckStore(config.decks_dir),
        text_box=TextBox(*config.text_box),
    )
    result = builder.build(words)
"""

from codedeck.core.compositor import tile_template
from codedeck.core.config import CodedeckConfig, config
from codedeck.core.deck import DeckBuilder, DeckResult, build_deck_urls
from codedeck.core.errors import (
    DeckError,
    EncodeOrWriteFailure,
    InvalidEncoding,
    ResourceLoadFailure,
    TooFewWords,
    TooManyWords,
)
from codedeck.core.layout import GridLayout, plan_grid, tile_origin
from codedeck.core.overlay import TextBox, draw_words
from codedeck.core.resources import DeckResources
from codedeck.core.store import DeckArtifact, DeckStore
from codedeck.core.words import parse_words

__all__ = [
    "CodedeckConfig",
    "DeckArtifact",
    "DeckBuilder",
    "DeckError",
    "DeckResources",
    "DeckResult",
    "DeckStore",
    "EncodeOrWriteFailure",
    "GridLayout",
    "InvalidEncoding",
    "ResourceLoadFailure",
    "TextBox",
    "TooFewWords",
    "TooManyWords",
    "build_deck_urls",
    "config",
    "draw_words",
    "parse_words",
    "plan_grid",
    "tile_origin",
    "tile_template",
]
