"""Single-question chat completion page service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from learnify.errors import NetworkError

logger = logging.getLogger(__name__)

NO_RESPONSE = "❌ No response from OpenAI."


class ChatClient(Protocol):
    """Interface for a hosted chat-completion API."""

    async def complete(
        self, prompt: str, *, model: str, json_output: bool = False
    ) -> str | None:
        """Return the first reply message's content, if any.

        Raises ``NetworkError`` when the call itself fails.
        """


@dataclass
class ChatService:
    """Forwards one free-text question and returns the raw reply."""

    client: ChatClient | None
    model: str

    async def ask(self, question: str) -> str:
        """Return the model's answer, or a fallback string."""
        if self.client is None:
            return NO_RESPONSE
        try:
            answer = await self.client.complete(question, model=self.model)
        except NetworkError:
            logger.exception("Chat completion failed", extra={"model": self.model})
            return NO_RESPONSE
        return answer or NO_RESPONSE
