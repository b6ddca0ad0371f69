"""Conversion of uploaded media into a text question."""

from typing import Protocol


class TextConverter(Protocol):
    """Turns image or audio bytes into question text.

    Implementations raise ``ConversionError`` for input they cannot handle.
    """

    async def to_text(self, data: bytes, mime_type: str) -> str:
        """Return the text found in ``data``."""
