"""Request body parsing for deck uploads."""

from __future__ import annotations

from codedeck.core.errors import InvalidEncoding, TooFewWords, TooManyWords


def parse_words(
    body: bytes,
    *,
    min_words: int,
    max_words: int = 0,
    skip_blank_lines: bool = False,
) -> list[str]:
    """Turn a raw request body into the ordered list of card words.

    The body is decoded as UTF-8 and trimmed as a whole, so leading and
    trailing blank lines never count.  It is then split on line feeds only,
    and each line is trimmed, which also drops the carriage return of CRLF
    endings.  Form feeds and other Unicode line separators stay inside their
    word.  Interior blank lines become empty words (blank cards) unless
    *skip_blank_lines* is set.

    Args:
        body: Raw request bytes.
        min_words: Smallest accepted word count.
        max_words: Largest accepted word count; ``0`` disables the check.
        skip_blank_lines: Drop empty lines instead of keeping them as cards.

    Returns:
        The words in the order they appeared.

    Raises:
        InvalidEncoding: If *body* is not valid UTF-8.
        TooFewWords: If fewer than *min_words* words remain.
        TooManyWords: If more than *max_words* words remain.
    """
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncoding(f"Request body is not valid UTF-8: {exc.reason}") from exc

    text = text.strip()
    words = [line.strip() for line in text.split("\n")] if text else []
    if skip_blank_lines:
        words = [word for word in words if word]

    if len(words) < min_words:
        raise TooFewWords(len(words), min_words)
    if max_words and len(words) > max_words:
        raise TooManyWords(len(words), max_words)

    return words
