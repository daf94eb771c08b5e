"""Validation of raw model output against the ``{cmd, runnable}`` shape."""

from __future__ import annotations

import json
from typing import Any

from nl2cmd_service.domain.entities import CommandResult
from nl2cmd_service.domain.exceptions import SchemaError


def strip_code_fences(raw: str) -> str:
    """Remove a surrounding Markdown code fence (```json … ```), if any."""
    text = raw.strip()
    if text.startswith("```"):
        first_nl = text.index("\n") if "\n" in text else 3
        text = text[first_nl + 1 :]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_command_output(raw: str) -> CommandResult:
    """Parse the LLM JSON output into a :class:`CommandResult`.

    Raises :class:`SchemaError` (with the raw text attached) when the output
    is not a JSON object holding a non-empty string ``cmd`` and a boolean
    ``runnable``.
    """
    text = strip_code_fences(raw)

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"LLM returned invalid JSON: {exc}", raw_text=raw) from exc

    if not isinstance(data, dict):
        raise SchemaError("LLM response is not a JSON object.", raw_text=raw)

    cmd = data.get("cmd")
    runnable = data.get("runnable")

    if not isinstance(cmd, str) or not cmd.strip():
        raise SchemaError("LLM response missing 'cmd' field.", raw_text=raw)
    # bool only: 0/1 and "true" are rejected
    if not isinstance(runnable, bool):
        raise SchemaError("LLM response missing boolean 'runnable' field.", raw_text=raw)

    return CommandResult(command=cmd, runnable=runnable)
