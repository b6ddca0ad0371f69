"""MongoDB-backed solution repository."""

from dataclasses import dataclass

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from learnify.domain.solutions import SolutionRecord
from learnify.errors import PersistenceError
from learnify.services.solve import SolutionRepository


@dataclass
class MongoSolutionRepository(SolutionRepository):
    """MongoDB implementation for solved questions."""

    collection: Collection

    def create_solution(self, record: SolutionRecord) -> None:
        """Insert a solution document."""
        document: dict[str, object] = {
            "sessionId": record.session_id,
            "question": record.question,
            "subject": record.subject,
            "classLevel": record.class_level,
            "method": record.method.value,
            "solution": record.solution,
            "explanation": record.explanation,
            "resources": list(record.resources),
            "createdAt": record.created_at,
        }
        if record.image_path:
            document["imagePath"] = record.image_path
        if record.audio_path:
            document["audioPath"] = record.audio_path
        try:
            self.collection.insert_one(document)
        except PyMongoError as exc:
            raise PersistenceError("Failed to save solution") from exc
