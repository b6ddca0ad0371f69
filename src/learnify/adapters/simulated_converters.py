"""Placeholder OCR and speech-to-text converters.

Neither converter reads the media; they only check the MIME family and
describe the input so the rest of the pipeline has a question to work with.
"""

from dataclasses import dataclass

from learnify.errors import ConversionError
from learnify.services.conversion import TextConverter


@dataclass
class SimulatedImageToText(TextConverter):
    """Stands in for OCR."""

    async def to_text(self, data: bytes, mime_type: str) -> str:
        """Return a surrogate question for an image."""
        if not mime_type.startswith("image/"):
            raise ConversionError(f"Cannot read text from {mime_type or 'unknown'} data")
        if not data:
            raise ConversionError("Image is empty")
        return f"Image content ({mime_type}, {len(data)} bytes)"


@dataclass
class SimulatedSpeechToText(TextConverter):
    """Stands in for speech recognition."""

    async def to_text(self, data: bytes, mime_type: str) -> str:
        """Return a surrogate transcript for a recording."""
        if not mime_type.startswith("audio/"):
            raise ConversionError(f"Cannot transcribe {mime_type or 'unknown'} data")
        if not data:
            return f"Voice question ({mime_type}, no audio captured)"
        return f"Voice question ({mime_type}, {len(data)} bytes)"
