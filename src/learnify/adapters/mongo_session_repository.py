"""MongoDB-backed session repository."""

from dataclasses import dataclass

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from learnify.domain.sessions import SessionRecord
from learnify.errors import PersistenceError
from learnify.services.sessions import SessionRepository


@dataclass
class MongoSessionRepository(SessionRepository):
    """MongoDB implementation for visitor sessions."""

    collection: Collection

    def create_session(self, record: SessionRecord) -> None:
        """Insert a session document."""
        try:
            self.collection.insert_one(
                {
                    "sessionId": record.session_id,
                    "createdAt": record.created_at,
                    "lastActivity": record.last_activity,
                }
            )
        except PyMongoError as exc:
            raise PersistenceError("Failed to create session") from exc
