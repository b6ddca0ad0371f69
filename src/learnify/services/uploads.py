"""Upload validation and storage interface."""

from dataclasses import dataclass
from typing import Protocol

from learnify.errors import UploadError


class UploadStore(Protocol):
    """Storage interface for accepted uploads."""

    def save(self, filename: str, data: bytes) -> str:
        """Store the bytes and return the public path, e.g. ``uploads/<file>``."""


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded file as received by the API."""

    filename: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class UploadPolicy:
    """Size ceiling and MIME family accepted for one upload field."""

    field_name: str
    mime_prefix: str
    max_bytes: int

    def check(self, upload: UploadedFile | None) -> UploadedFile:
        """Return the upload if it is acceptable, else raise ``UploadError``."""
        if upload is None:
            raise UploadError(f"No {self.field_name} file uploaded")
        if not upload.content_type.startswith(self.mime_prefix):
            raise UploadError(
                "Only image or audio files are allowed!", status_code=415
            )
        if len(upload.data) > self.max_bytes:
            limit_mb = max(1, self.max_bytes // (1024 * 1024))
            raise UploadError(
                f"File too large (max {limit_mb}MB)", status_code=413
            )
        return upload
