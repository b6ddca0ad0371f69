"""Domain models for visitor sessions."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class SessionRecord:
    """Represents a persisted per-visit session."""

    session_id: str
    created_at: datetime
    last_activity: datetime
