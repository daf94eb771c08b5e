"""Port: LLM gateway — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from nl2cmd_service.domain.entities import RenderedPrompt


class LlmGateway(Protocol):
    """Abstract contract for interacting with a large-language model."""

    async def complete(self, prompt: RenderedPrompt) -> str:
        """Send a rendered prompt and return the raw completion text."""
        ...
