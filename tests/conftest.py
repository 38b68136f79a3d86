"""Shared pytest fixtures for Codedeck tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from codedeck.core.config import CodedeckConfig
from codedeck.core.deck import DeckBuilder
from codedeck.core.overlay import TextBox
from codedeck.core.resources import DeckResources
from codedeck.core.store import DeckStore

TEMPLATE_SIZE = (360, 240)
FRONT_BACKGROUND = (255, 255, 255, 255)
BACK_BACKGROUND = (30, 60, 120, 255)


def make_front_template() -> Image.Image:
    """A white card with a red border and a grey text band."""
    image = Image.new("RGBA", TEMPLATE_SIZE, FRONT_BACKGROUND)
    draw = ImageDraw.Draw(image)
    draw.rectangle([0, 0, TEMPLATE_SIZE[0] - 1, TEMPLATE_SIZE[1] - 1], outline=(200, 0, 0, 255), width=4)
    draw.rectangle([30, 120, 330, 200], fill=(235, 235, 235, 255))
    return image


def make_back_template() -> Image.Image:
    """A solid blue card with one marker pixel in the corner."""
    image = Image.new("RGBA", TEMPLATE_SIZE, BACK_BACKGROUND)
    image.putpixel((5, 5), (255, 255, 0, 255))
    return image


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def front_template() -> Image.Image:
    """In-memory front template."""
    return make_front_template()


@pytest.fixture
def back_template() -> Image.Image:
    """In-memory back template."""
    return make_back_template()


@pytest.fixture
def template_paths(temp_dir: Path) -> tuple[Path, Path]:
    """Write front and back templates to disk.

    Returns:
        ``(front_path, back_path)``
    """
    assets_dir = temp_dir / "assets"
    assets_dir.mkdir()
    front_path = assets_dir / "front.png"
    back_path = assets_dir / "back.png"
    make_front_template().save(front_path)
    make_back_template().save(back_path)
    return front_path, back_path


@pytest.fixture
def test_config(temp_dir: Path, template_paths: tuple[Path, Path]) -> CodedeckConfig:
    """Create a test configuration pointing at temporary assets and decks.

    Args:
        temp_dir: Temporary directory from fixture
        template_paths: Template files from fixture

    Returns:
        CodedeckConfig instance for testing
    """
    front_path, back_path = template_paths
    return CodedeckConfig(
        _env_file=None,
        root_url="http://testserver",
        front_template=str(front_path),
        back_template=str(back_path),
        font_path=None,
        font_size=16,
        decks_dir=str(temp_dir / "decks"),
    )


@pytest.fixture
def resources(test_config: CodedeckConfig) -> DeckResources:
    """Loaded templates and font for the test configuration."""
    return DeckResources.load(test_config)


@pytest.fixture
def deck_builder(test_config: CodedeckConfig, resources: DeckResources) -> DeckBuilder:
    """A builder writing into the test deck directory."""
    return DeckBuilder(
        resources,
        DeckStore(test_config.decks_dir),
        text_box=TextBox(*test_config.text_box),
        text_color=test_config.text_color,
    )


@pytest.fixture
def test_client(test_config: CodedeckConfig) -> Generator[TestClient, None, None]:
    """FastAPI TestClient for an app built from the test configuration.

    The client is used as a context manager so the lifespan handler runs
    and loads the deck assets.
    """
    from codedeck.api.main import create_app

    with TestClient(create_app(test_config)) as client:
        yield client
