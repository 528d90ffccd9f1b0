"""Insert a delimiter after every character from point to end of buffer."""

from __future__ import annotations

import grapheme

from edkit.buffer import Buffer

DEFAULT_DELIMITER = "\n"


def split_text(text: str, delimiter: str = DEFAULT_DELIMITER) -> str:
    """Return ``text`` with ``delimiter`` after each grapheme cluster."""
    return "".join(g + delimiter for g in grapheme.graphemes(text))


def split_characters(buffer: Buffer, delimiter: str = DEFAULT_DELIMITER) -> None:
    """Split the buffer from point onward, leaving point at end of buffer.

    Existing newlines count as characters. Running it twice doubles the
    delimiters.
    """
    text = buffer.get_text()
    offset = buffer.offset_of(buffer.point)
    buffer.set_text(text[:offset] + split_text(text[offset:], delimiter))
    buffer.set_cursor(*buffer.end_position())
