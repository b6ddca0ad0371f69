"""HTTP client for the Solve API, used by the wizard controller."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError as PydanticValidationError

from learnify.domain.solutions import SolutionPayload
from learnify.domain.wizard import PendingFile
from learnify.errors import NetworkError


class SolveApi(Protocol):
    """Interface for the backend endpoints the wizard talks to."""

    async def create_session(self) -> str:
        """Create a session and return its id."""

    async def solve_text(
        self, question: str, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        """Submit a typed question."""

    async def solve_image(
        self, image: PendingFile, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        """Submit a photographed question."""

    async def solve_voice(
        self, audio: PendingFile, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        """Submit a recorded question."""


@dataclass
class HttpxSolveApiClient(SolveApi):
    """Solve API client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxSolveApiClient":
        """Create a Solve API client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def create_session(self) -> str:
        """Create a session via POST /api/sessions."""
        data = await self._post("/api/sessions", json={})
        session_id = data.get("sessionId")
        if not isinstance(session_id, str) or not session_id:
            raise NetworkError("Session response did not include a sessionId")
        return session_id

    async def solve_text(
        self, question: str, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        """Submit a typed question as JSON."""
        data = await self._post(
            "/api/solve/text",
            json={
                "question": question,
                "subject": subject,
                "classLevel": class_level,
                "sessionId": session_id,
            },
        )
        return _parse_solution(data)

    async def solve_image(
        self, image: PendingFile, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        """Submit a photographed question as multipart form data."""
        data = await self._post(
            "/api/solve/image",
            data=_form_fields(subject, class_level, session_id),
            files={"image": (image.filename, image.data, image.content_type)},
        )
        return _parse_solution(data)

    async def solve_voice(
        self, audio: PendingFile, subject: str, class_level: int, session_id: str | None
    ) -> SolutionPayload:
        """Submit a recorded question as multipart form data."""
        data = await self._post(
            "/api/solve/voice",
            data=_form_fields(subject, class_level, session_id),
            files={"audio": (audio.filename, audio.data, audio.content_type)},
        )
        return _parse_solution(data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _post(self, path: str, **kwargs: object) -> dict[str, object]:
        try:
            response = await self.http_client.post(
                f"{self.base_url}{path}", timeout=30, **kwargs
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise NetworkError("API request failed") from exc
        if not isinstance(payload, dict):
            raise NetworkError("API returned an unexpected payload")
        return payload


def _form_fields(
    subject: str, class_level: int, session_id: str | None
) -> dict[str, str]:
    fields = {"subject": subject, "classLevel": str(class_level)}
    if session_id:
        fields["sessionId"] = session_id
    return fields


def _parse_solution(data: dict[str, object]) -> SolutionPayload:
    try:
        return SolutionPayload.model_validate(data)
    except PydanticValidationError as exc:
        raise NetworkError("API returned an invalid solution") from exc
