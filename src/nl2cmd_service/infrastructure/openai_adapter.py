"""OpenAI-compatible adapter — implements the LlmGateway port.

Anthropic exposes an OpenAI-compatible chat-completions endpoint, so the
official ``openai`` SDK is pointed at ``PROVIDER_BASE_URL``.
"""

from __future__ import annotations

import logging

from openai import (
    APIConnectionError,
    APIStatusError,
    AsyncOpenAI,
    AuthenticationError,
    RateLimitError,
)

from nl2cmd_service.domain.entities import RenderedPrompt
from nl2cmd_service.domain.exceptions import ProviderError

logger = logging.getLogger(__name__)


class OpenAICompatAdapter:
    """Concrete ``LlmGateway`` backed by an OpenAI-compatible chat-completions API."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        # Provider errors are surfaced to the caller, never retried.
        self._client = client or AsyncOpenAI(
            api_key=api_key, base_url=base_url, max_retries=0
        )

    async def complete(self, prompt: RenderedPrompt) -> str:
        """Send the rendered prompt and return the completion text."""
        messages: list[dict[str, str]] = []
        if prompt.system:
            messages.append({"role": "system", "content": prompt.system})
        messages.append({"role": "user", "content": prompt.user})

        kwargs: dict[str, object] = {"model": prompt.model, "messages": messages}
        if prompt.temperature is not None:
            kwargs["temperature"] = prompt.temperature
        if prompt.max_tokens is not None:
            kwargs["max_tokens"] = prompt.max_tokens
        if prompt.json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await self._client.chat.completions.create(**kwargs)  # type: ignore[arg-type]
        except AuthenticationError as exc:
            raise ProviderError(
                "Invalid provider API key. "
                "Set a valid key in the CLAUDE_API_KEY environment variable."
            ) from exc
        except RateLimitError as exc:
            detail = str(exc)
            logger.error("Provider RateLimitError: %s", detail)
            raise ProviderError(f"Provider rate limit / quota error: {detail}") from exc
        except APIConnectionError as exc:
            raise ProviderError(f"Could not reach the LLM provider: {exc}") from exc
        except APIStatusError as exc:
            raise ProviderError(
                f"LLM provider returned HTTP {exc.status_code}: {exc.message}"
            ) from exc
        except Exception as exc:
            raise ProviderError(f"LLM call failed: {exc}") from exc

        if not response.choices or not response.choices[0].message.content:
            raise ProviderError("LLM returned an empty response.")

        return response.choices[0].message.content

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()
