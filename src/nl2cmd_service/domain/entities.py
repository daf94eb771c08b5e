"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandRequest:
    """A natural-language description of the desired terminal command."""

    description: str


@dataclass(frozen=True, slots=True)
class CommandResult:
    """The synthesised command and the model's verdict on running it as-is."""

    command: str
    runnable: bool


@dataclass(frozen=True, slots=True)
class RenderedPrompt:
    """A fully rendered completion request, ready for the provider."""

    model: str
    user: str
    system: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    json_mode: bool = False
