"""Visitor session lifecycle."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from learnify.domain.sessions import SessionRecord


class SessionRepository(Protocol):
    """Persistence interface for visitor sessions."""

    def create_session(self, record: SessionRecord) -> None:
        """Persist a new session."""


@dataclass
class SessionService:
    """Issues a fresh session for every app load."""

    repository: SessionRepository

    def create_session(self) -> SessionRecord:
        """Create, persist, and return a new session."""
        now = datetime.now(tz=UTC)
        record = SessionRecord(
            session_id=str(uuid4()),
            created_at=now,
            last_activity=now,
        )
        self.repository.create_session(record)
        return record
