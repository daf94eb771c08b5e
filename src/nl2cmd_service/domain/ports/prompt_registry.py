"""Port: prompt registry — read-only lookup of named prompt templates."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from nl2cmd_service.domain.entities import RenderedPrompt


class PromptDefinition(Protocol):
    """A template that can render a completion request from input variables."""

    name: str

    def render(self, variables: Mapping[str, Any]) -> RenderedPrompt:
        ...


class PromptRegistry(Protocol):
    """Abstract contract for resolving prompt templates by name."""

    def lookup(self, name: str) -> PromptDefinition:
        """Return the template registered as *name* or raise ``PromptNotFoundError``."""
        ...
