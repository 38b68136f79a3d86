"""Pydantic response models for the Codedeck API.

Models
------
DeckResponse
    Body of a successful ``PUT /upload`` - links to both sheets and the grid
    Tabletop Simulator needs to cut them into cards.
ErrorResponse
    Body of every failed request.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from codedeck.core.deck import DeckResult, build_deck_urls


class DeckResponse(BaseModel):
    """Response body for ``PUT /upload``.

    Attributes:
        front: Absolute URL of the front sheet.
        back: Absolute URL of the back sheet.
        num_cards: Number of cards (words) on the sheet.
        num_cards_wide: Grid columns.
        num_cards_tall: Grid rows.
    """

    front: str = Field(..., description="URL of the front sheet PNG.")
    back: str = Field(..., description="URL of the back sheet PNG.")
    num_cards: int = Field(..., ge=1, description="Number of cards in the deck.")
    num_cards_wide: int = Field(..., ge=1, description="Cards per row.")
    num_cards_tall: int = Field(..., ge=1, description="Cards per column.")

    @classmethod
    def from_result(cls, result: DeckResult, root_url: str) -> DeckResponse:
        """Build the response for a saved deck, linking under *root_url*."""
        front_url, back_url = build_deck_urls(root_url, result.artifact)
        return cls(
            front=front_url,
            back=back_url,
            num_cards=result.num_cards,
            num_cards_wide=result.layout.columns,
            num_cards_tall=result.layout.rows,
        )


class ErrorResponse(BaseModel):
    """Response body for failed requests.

    Attributes:
        error: Failure kind, e.g. ``"TooFewWords"``.
        detail: Human-readable explanation.
    """

    error: str = Field(..., description="Machine-readable failure kind.")
    detail: str = Field(..., description="Human-readable explanation.")
