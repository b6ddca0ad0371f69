"""Domain models for solved questions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class SolveMethod(str, Enum):
    """How the question was submitted."""

    TEXT = "text"
    IMAGE = "image"
    VOICE = "voice"


class SolutionPayload(BaseModel):
    """Solution triple returned for any submitted question."""

    solution: str
    explanation: str
    resources: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class SolutionRecord:
    """Immutable record of one successful submission."""

    session_id: str | None
    question: str
    subject: str
    class_level: int
    method: SolveMethod
    solution: str
    explanation: str
    resources: tuple[str, ...]
    created_at: datetime
    image_path: str | None = None
    audio_path: str | None = None
