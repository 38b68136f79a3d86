"""Codedeck - tiled word-card sheets for virtual tabletop decks."""

__version__ = "0.1.0"

from codedeck.core.config import CodedeckConfig, config

__all__ = [
    "CodedeckConfig",
    "config",
]
