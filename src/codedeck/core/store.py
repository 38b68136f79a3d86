"""File-backed storage for generated decks.

Each deck is a pair of PNG files sharing a random UUID4 name:

- ``{id}_f.png`` - the front sheet
- ``{id}_b.png`` - the back sheet

Both files are first written under hidden temporary names and only renamed
into place once both encoded successfully.  If anything fails, every file
written for the deck is removed again, so a half-written deck never shows
up under its public name.  Decks are never overwritten or deleted once
saved.
"""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from codedeck.core.errors import EncodeOrWriteFailure

logger = logging.getLogger(__name__)

FRONT_SUFFIX = "_f.png"
BACK_SUFFIX = "_b.png"


@dataclass(frozen=True)
class DeckArtifact:
    """A saved deck.

    Attributes:
        deck_id: UUID string shared by both files.
        front_path: Path of the front sheet.
        back_path: Path of the back sheet.
    """

    deck_id: str
    front_path: Path
    back_path: Path

    @property
    def front_filename(self) -> str:
        return self.front_path.name

    @property
    def back_filename(self) -> str:
        return self.back_path.name


class DeckStore:
    """Writes finished sheets into the deck directory."""

    def __init__(self, deck_dir: Path) -> None:
        self.deck_dir = Path(deck_dir)

    def save(self, front: Image.Image, back: Image.Image) -> DeckArtifact:
        """Encode and persist both sheets under a fresh identifier.

        Args:
            front: Finished front sheet.
            back: Finished back sheet.

        Returns:
            The saved :class:`DeckArtifact`.

        Raises:
            EncodeOrWriteFailure: If the directory cannot be created or
                either sheet cannot be encoded or written.  No file of the
                deck is left behind in that case.
        """
        deck_id = str(uuid.uuid4())
        front_path = self.deck_dir / f"{deck_id}{FRONT_SUFFIX}"
        back_path = self.deck_dir / f"{deck_id}{BACK_SUFFIX}"

        try:
            self.deck_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise EncodeOrWriteFailure(f"Could not create deck directory '{self.deck_dir}': {exc}") from exc

        written: list[Path] = []
        try:
            staged = []
            for image, final_path in ((front, front_path), (back, back_path)):
                temp_path = final_path.with_name(f".{final_path.name}.tmp")
                written.append(temp_path)
                image.save(temp_path, format="PNG")
                staged.append((temp_path, final_path))

            for temp_path, final_path in staged:
                written.append(final_path)
                os.replace(temp_path, final_path)
        except (OSError, ValueError) as exc:
            for path in written:
                try:
                    path.unlink(missing_ok=True)
                except OSError:
                    logger.warning("Could not remove partial deck file '%s'.", path)
            raise EncodeOrWriteFailure(f"Could not write deck {deck_id}: {exc}") from exc

        logger.info("Saved deck %s to '%s'.", deck_id, self.deck_dir)
        return DeckArtifact(deck_id=deck_id, front_path=front_path, back_path=back_path)
