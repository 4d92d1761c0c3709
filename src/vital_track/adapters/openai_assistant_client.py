"""OpenAI Responses API client for the health assistant."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from vital_track.domain.assistant import ChatMessage
from vital_track.services.assistant import AssistantClient

_ROLES = {"user": "user", "model": "assistant"}


@dataclass
class OpenAIAssistantClient(AssistantClient):
    """Assistant client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAssistantClient":
        """Create an OpenAI assistant client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(  # noqa: PLR0913
        self,
        *,
        model: str,
        instructions: str | None,
        messages: list[ChatMessage],
        temperature: float,
        max_output_tokens: int,
    ) -> str:
        """Call OpenAI Responses API and return the output text."""
        request_payload: dict[str, object] = {
            "model": model,
            "input": [
                {"role": _ROLES[message.role], "content": message.text}
                for message in messages
            ],
            "temperature": temperature,
            "max_output_tokens": max_output_tokens,
            "store": False,
        }
        if instructions:
            request_payload["instructions"] = instructions

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Release the underlying HTTP connections."""
        await self.client.close()
