"""Filesystem storage for uploaded images and recordings."""

import time
from dataclasses import dataclass
from pathlib import Path

from learnify.errors import PersistenceError
from learnify.services.uploads import UploadStore

PUBLIC_PREFIX = "uploads"


@dataclass
class LocalUploadStore(UploadStore):
    """Writes uploads to a local directory served under /uploads."""

    directory: Path

    @classmethod
    def create(cls, directory: str) -> "LocalUploadStore":
        """Create the store, making the directory if needed."""
        path = Path(directory)
        path.mkdir(parents=True, exist_ok=True)
        return cls(directory=path)

    def save(self, filename: str, data: bytes) -> str:
        """Write the file as ``<epoch-millis>-<basename>`` and return its path."""
        basename = Path(filename).name or "upload"
        stored_name = f"{int(time.time() * 1000)}-{basename}"
        try:
            (self.directory / stored_name).write_bytes(data)
        except OSError as exc:
            raise PersistenceError("Failed to store upload") from exc
        return f"{PUBLIC_PREFIX}/{stored_name}"
