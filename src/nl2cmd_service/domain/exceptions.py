"""Domain exception hierarchy.

Each exception maps to a specific HTTP status code at the interface layer.
Inner layers raise these; the outermost error-handler translates them.
"""

from __future__ import annotations


class Nl2CmdError(Exception):
    """Base exception for the entire application."""


# ── Prompt templates ────────────────────────────────────────────────────────


class PromptNotFoundError(Nl2CmdError):
    """No prompt template is registered under the requested name."""


NotFoundError = PromptNotFoundError


class PromptRenderError(Nl2CmdError):
    """A prompt template could not be rendered with the supplied input."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class ProviderError(Nl2CmdError):
    """Any error originating from the LLM provider."""


class SchemaError(Nl2CmdError):
    """The model output does not match the expected ``{cmd, runnable}`` shape.

    The offending text is kept on :attr:`raw_text` for diagnostics; it is
    never returned to the caller.
    """

    def __init__(self, message: str, raw_text: str = "") -> None:
        super().__init__(message)
        self.raw_text = raw_text
