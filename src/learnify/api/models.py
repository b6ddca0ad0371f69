"""Pydantic models for API payloads."""

from pydantic import BaseModel, ConfigDict, Field


class SolveTextRequest(BaseModel):
    """Body of POST /api/solve/text.

    Every field is optional here so that missing values reach the service and
    fail with its own message instead of a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    question: str | None = None
    subject: str | None = None
    class_level: int | str | None = Field(default=None, alias="classLevel")
    session_id: str | None = Field(default=None, alias="sessionId")


class HelperRequest(BaseModel):
    """Body of POST /api/helper."""

    query: str = ""
