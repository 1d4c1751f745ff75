"""OpenAI-compatible chat completions client (OpenRouter by default)."""

from dataclasses import dataclass

from openai import APIConnectionError, APIStatusError, AsyncOpenAI, OpenAIError

from fitbot.domain.errors import (
    TransportError,
    UpstreamFormatError,
    UpstreamStatusError,
)
from fitbot.services.external_ai import ChatCompletionClient

_DEFAULT_HEADERS = {
    "HTTP-Referer": "http://localhost:3000",
    "X-Title": "FitBot",
}


@dataclass
class OpenAIChatClient(ChatCompletionClient):
    """Chat client backed by the OpenAI SDK's chat completions API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "OpenAIChatClient":
        """Create a chat client; retries are left to the caller's fallback."""
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                default_headers=_DEFAULT_HEADERS,
            )
        )

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        system_prompt: str,
        user_message: str,
        temperature: float,
        max_tokens: int,
    ) -> str | None:
        """Call the chat completions endpoint and return the first choice."""
        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APIStatusError as exc:
            raise UpstreamStatusError(
                "Chat completion API", exc.status_code, exc.response.text
            ) from exc
        except APIConnectionError as exc:
            raise TransportError(f"Chat completion API unreachable: {exc}") from exc
        except (OpenAIError, ValueError) as exc:
            raise UpstreamFormatError(
                f"Chat completion API returned an unusable response: {exc}"
            ) from exc

        choices = getattr(response, "choices", None)
        if choices is None:
            raise UpstreamFormatError("Chat completion API returned no completion")
        if not choices:
            return None
        return choices[0].message.content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
