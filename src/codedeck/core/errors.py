"""Error taxonomy for deck generation.

Every failure the pipeline can produce is one of the exceptions below.
Client errors describe a bad request body and are raised before any image
work starts.  Operational errors describe the server's own assets or disk
and are independent of what the client sent.

The HTTP layer maps ``client_error`` to a 400 response and everything else
to a 500 response; see :mod:`codedeck.api.main`.
"""

from __future__ import annotations


class DeckError(Exception):
    """Base class for all deck generation failures.

    Attributes:
        kind: Stable, machine-readable name of the failure, returned to
            clients in the ``error`` field of the response body.
        client_error: ``True`` if the request itself was at fault.
    """

    kind = "DeckError"
    client_error = False


class InvalidEncoding(DeckError):
    """The request body is not valid UTF-8 text."""

    kind = "InvalidEncoding"
    client_error = True


class TooFewWords(DeckError):
    """The request body holds fewer words than the configured minimum."""

    kind = "TooFewWords"
    client_error = True

    def __init__(self, count: int, minimum: int) -> None:
        super().__init__(f"Need at least {minimum} words, got {count}")
        self.count = count
        self.minimum = minimum


class TooManyWords(DeckError):
    """The request body holds more words than the configured maximum."""

    kind = "TooManyWords"
    client_error = True

    def __init__(self, count: int, maximum: int) -> None:
        super().__init__(f"At most {maximum} words are allowed, got {count}")
        self.count = count
        self.maximum = maximum


class ResourceLoadFailure(DeckError):
    """A template image or the font could not be loaded or decoded."""

    kind = "ResourceLoadFailure"


class EncodeOrWriteFailure(DeckError):
    """A finished canvas could not be encoded or written to the deck store."""

    kind = "EncodeOrWriteFailure"
