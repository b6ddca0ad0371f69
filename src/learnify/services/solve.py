"""Question submission handling for the three solve methods."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from learnify.domain.solutions import SolutionPayload, SolutionRecord, SolveMethod
from learnify.domain.subjects import is_valid_class_level
from learnify.errors import ValidationError
from learnify.services.conversion import TextConverter
from learnify.services.solutions import SolutionStrategy
from learnify.services.uploads import UploadedFile, UploadPolicy, UploadStore

logger = logging.getLogger(__name__)

MISSING_FIELDS = "Missing required fields"
IMAGE_QUESTION_PREVIEW = 50


class SolutionRepository(Protocol):
    """Persistence interface for solved questions."""

    def create_solution(self, record: SolutionRecord) -> None:
        """Persist a solution record."""


@dataclass
class SolveService:
    """Validates a submission, generates a solution, and records it."""

    strategy: SolutionStrategy
    repository: SolutionRepository
    upload_store: UploadStore
    image_converter: TextConverter
    speech_converter: TextConverter
    max_upload_bytes: int

    async def solve_text(
        self,
        question: str | None,
        subject: str | None,
        class_level: int | str | None,
        session_id: str | None,
    ) -> SolutionPayload:
        """Solve a typed question."""
        cleaned_question = (question or "").strip()
        if not cleaned_question:
            raise ValidationError(MISSING_FIELDS)
        resolved_subject, resolved_level = _require_selection(subject, class_level)
        payload = await self.strategy.generate(
            cleaned_question, resolved_subject, resolved_level
        )
        self._record(
            session_id=session_id,
            question=cleaned_question,
            subject=resolved_subject,
            class_level=resolved_level,
            method=SolveMethod.TEXT,
            payload=payload,
        )
        return payload

    async def solve_image(
        self,
        image: UploadedFile | None,
        subject: str | None,
        class_level: int | str | None,
        session_id: str | None,
    ) -> SolutionPayload:
        """Solve a photographed question."""
        resolved_subject, resolved_level = _require_selection(subject, class_level)
        policy = UploadPolicy("image", "image/", self.max_upload_bytes)
        accepted = policy.check(image)
        extracted = await self.image_converter.to_text(
            accepted.data, accepted.content_type
        )
        image_path = self.upload_store.save(accepted.filename, accepted.data)
        payload = await self.strategy.generate(
            extracted, resolved_subject, resolved_level
        )
        self._record(
            session_id=session_id,
            question=f"Image: {extracted[:IMAGE_QUESTION_PREVIEW]}...",
            subject=resolved_subject,
            class_level=resolved_level,
            method=SolveMethod.IMAGE,
            payload=payload,
            image_path=image_path,
        )
        return payload

    async def solve_voice(
        self,
        audio: UploadedFile | None,
        subject: str | None,
        class_level: int | str | None,
        session_id: str | None,
    ) -> SolutionPayload:
        """Solve a spoken question."""
        resolved_subject, resolved_level = _require_selection(subject, class_level)
        policy = UploadPolicy("audio", "audio/", self.max_upload_bytes)
        accepted = policy.check(audio)
        transcript = await self.speech_converter.to_text(
            accepted.data, accepted.content_type
        )
        audio_path = self.upload_store.save(accepted.filename, accepted.data)
        payload = await self.strategy.generate(
            transcript, resolved_subject, resolved_level
        )
        self._record(
            session_id=session_id,
            question=transcript,
            subject=resolved_subject,
            class_level=resolved_level,
            method=SolveMethod.VOICE,
            payload=payload,
            audio_path=audio_path,
        )
        return payload

    def _record(  # noqa: PLR0913
        self,
        *,
        session_id: str | None,
        question: str,
        subject: str,
        class_level: int,
        method: SolveMethod,
        payload: SolutionPayload,
        image_path: str | None = None,
        audio_path: str | None = None,
    ) -> None:
        record = SolutionRecord(
            session_id=session_id,
            question=question,
            subject=subject,
            class_level=class_level,
            method=method,
            solution=payload.solution,
            explanation=payload.explanation,
            resources=tuple(payload.resources),
            created_at=datetime.now(tz=UTC),
            image_path=image_path,
            audio_path=audio_path,
        )
        self.repository.create_solution(record)
        logger.info(
            "Solved %s question",
            method.value,
            extra={"session_id": session_id, "subject": subject},
        )


def _require_selection(
    subject: str | None, class_level: int | str | None
) -> tuple[str, int]:
    """Return the subject and class level, or raise when either is missing."""
    cleaned_subject = (subject or "").strip()
    if not cleaned_subject or class_level is None or class_level == "":
        raise ValidationError(MISSING_FIELDS)
    level = _parse_class_level(class_level)
    if level is None or not is_valid_class_level(level):
        raise ValidationError("classLevel must be a whole number from 1 to 12")
    return cleaned_subject, level


def _parse_class_level(value: int | str) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    cleaned = value.strip()
    if not cleaned.isdecimal():
        return None
    try:
        return int(cleaned)
    except ValueError:
        return None
