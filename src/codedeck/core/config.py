"""Configuration management for Codedeck.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the CODEDECK_ prefix,
allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (CODEDECK_* prefix)
2. .env file in the project root
3. Default values defined in CodedeckConfig

The public root URL is additionally read from the bare ``ROOT`` variable so
existing deployments keep working.

Example .env file:
    CODEDECK_ROOT_URL=https://decks.example.com
    CODEDECK_FRONT_TEMPLATE=assets/codenames-front.png
    CODEDECK_BACK_TEMPLATE=assets/codenames-back.png
    CODEDECK_FONT_PATH=assets/DejaVuSans.ttf
    CODEDECK_TEXT_BOX=[40, 134, 313, 190]

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.
The FastAPI application built by :func:`codedeck.api.main.create_app` uses it
unless another instance is passed in (the test suite does this).

Usage Example
-------------
    from codedeck.core.config import config

    print(config.root_url)
    print(config.decks_dir)

Directory Management
--------------------
The configuration creates ``decks_dir`` on initialization so the static
``/deck`` mount always has a directory to serve from.
"""

from pathlib import Path

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# The installed package directory; archived and served at ``GET /source``.
PACKAGE_DIR = Path(__file__).resolve().parent.parent


class CodedeckConfig(BaseSettings):
    """Main configuration for Codedeck.

    Attributes
    ----------
    Public URLs:
        root_url : str
            URL the service is reachable at; deck links are built from it.

    Assets:
        front_template : Path
            PNG tiled across the front sheet; words are drawn on it.
        back_template : Path
            PNG tiled across the back sheet.
        font_path : Path | None
            TrueType font for the words.  ``None`` uses Pillow's bundled
            default font at ``font_size``.
        font_size : int
            Glyph size in pixels.
        text_box : tuple[int, int, int, int]
            ``(x0, y0, x1, y1)`` in template pixels.  Words are drawn from
            the top-left corner; the right/bottom edges are informational.
        text_color : tuple[int, int, int, int]
            RGBA fill colour for the words.

    Deck Generation:
        decks_dir : Path
            Directory generated sheets are written to and served from.
        min_words : int
            Smallest accepted word list.
        max_words : int
            Largest accepted word list, ``0`` for no limit.
        skip_blank_lines : bool
            Drop interior blank lines instead of turning them into blank cards.

    Server:
        source_dir : Path
            Directory archived for ``GET /source``.  Defaults to the installed
            ``codedeck`` package only; point ``CODEDECK_SOURCE_DIR`` at a
            checkout to serve the whole repository.
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Bind port (1024-65535).

    Examples
    --------
        >>> custom_config = CodedeckConfig(
        ...     root_url="https://decks.example.com",
        ...     decks_dir="/srv/decks",
        ...     min_words=9,
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CODEDECK_",
        case_sensitive=False,
    )

    # Public URLs
    root_url: str = Field(
        default="http://127.0.0.1:3030",
        validation_alias=AliasChoices("root_url", "CODEDECK_ROOT_URL", "ROOT"),
        description="URL this service is served at, used to build deck links",
    )

    # Assets
    front_template: Path = Field(
        default=Path("assets/codenames-front.png"),
        description="Front card template image",
    )
    back_template: Path = Field(
        default=Path("assets/codenames-back.png"),
        description="Back card template image",
    )
    font_path: Path | None = Field(
        default=None,
        description="TrueType font file (None uses Pillow's default font)",
    )
    font_size: int = Field(default=64, ge=1, le=512)
    text_box: tuple[int, int, int, int] = Field(
        default=(40, 134, 313, 190),
        description="Text rectangle (x0, y0, x1, y1) in template pixels",
    )
    text_color: tuple[int, int, int, int] = Field(
        default=(0, 0, 0, 255),
        description="RGBA colour of the words",
    )

    # Deck generation
    decks_dir: Path = Field(
        default=Path("decks"),
        description="Directory to write generated decks to",
    )
    min_words: int = Field(default=25, ge=1)
    max_words: int = Field(
        default=400,
        ge=0,
        description="Upper bound on words per deck (0 disables the limit)",
    )
    skip_blank_lines: bool = Field(
        default=False,
        description="Drop interior blank lines instead of rendering blank cards",
    )

    # Server
    source_dir: Path = Field(
        default=PACKAGE_DIR,
        description="Directory served as a tar archive at /source (the codedeck package by default)",
    )
    server_host: str = Field(default="127.0.0.1")
    server_port: int = Field(default=3030, ge=1024, le=65535)

    @model_validator(mode="after")
    def _check_bounds(self) -> "CodedeckConfig":
        x0, y0, x1, y1 = self.text_box
        if x0 < 0 or y0 < 0 or x1 < x0 or y1 < y0:
            raise ValueError(f"text_box must satisfy 0 <= x0 <= x1 and 0 <= y0 <= y1, got {self.text_box}")
        if any(not 0 <= channel <= 255 for channel in self.text_color):
            raise ValueError(f"text_color channels must be within 0-255, got {self.text_color}")
        if self.max_words and self.max_words < self.min_words:
            raise ValueError("max_words must be 0 or at least min_words")
        return self

    def __init__(self, **kwargs):
        """Initialize configuration and create the deck directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.decks_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (CODEDECK_* prefix, plus ROOT) and .env.
config = CodedeckConfig()
