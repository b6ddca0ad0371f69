"""Error hierarchy shared by services, adapters, and the HTTP layer.

Every error carries the HTTP status the API answers with and a message that
is safe to return to the caller verbatim.
"""


class LearnifyError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_response(self) -> dict[str, str]:
        """Return the JSON error body."""
        return {"error": self.message}


class ValidationError(LearnifyError):
    """A required field is missing or invalid."""

    status_code = 400


class UploadError(LearnifyError):
    """An uploaded file is missing, too large, or of the wrong type."""

    status_code = 400


class ConversionError(LearnifyError):
    """A converter cannot turn the given bytes into text."""

    status_code = 422


class PersistenceError(LearnifyError):
    """A write to the persistence layer failed."""

    status_code = 500


class NetworkError(LearnifyError):
    """An outbound call to an external collaborator failed."""

    status_code = 502
