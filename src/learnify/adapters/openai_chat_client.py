"""OpenAI Chat Completions client."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from learnify.errors import NetworkError
from learnify.services.chat import ChatClient


@dataclass
class OpenAIChatClient(ChatClient):
    """Chat client backed by the OpenAI Chat Completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIChatClient":
        """Create an OpenAI chat client that never retries."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0))

    async def complete(
        self, prompt: str, *, model: str, json_output: bool = False
    ) -> str | None:
        """Send one user message and return the first reply's content."""
        request_payload: dict[str, object] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if json_output:
            request_payload["response_format"] = {"type": "json_object"}

        try:
            response = await self.client.chat.completions.create(**request_payload)
        except OpenAIError as exc:
            raise NetworkError("Chat completion request failed") from exc
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
