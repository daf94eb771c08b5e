"""File-backed prompt store — implements the PromptRegistry port.

Templates live in ``*.prompt`` files: an optional YAML front matter block
delimited by ``---`` lines, followed by the template body.  The body may be
split into messages with ``{{role "system"}}`` / ``{{role "user"}}`` markers
and uses ``{{ variable }}`` placeholders, rendered with Jinja2.

Example::

    ---
    model: anthropic/claude-3-5-haiku-latest
    config:
      temperature: 0.2
    output:
      format: json
      schema:
        cmd: string, the shell command
        runnable: boolean
    ---
    {{role "system"}}
    You translate requests into shell commands.
    {{role "user"}}
    {{nl2cmd}}
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml
from jinja2 import Environment, StrictUndefined, Template, TemplateError

from nl2cmd_service.domain.entities import RenderedPrompt
from nl2cmd_service.domain.exceptions import PromptNotFoundError, PromptRenderError

logger = logging.getLogger(__name__)

PROMPT_SUFFIX = ".prompt"

_FRONT_MATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(?P<meta>.*?)\r?\n---[ \t]*(?:\r?\n|\Z)(?P<body>.*)\Z",
    re.DOTALL,
)
_ROLE_RE = re.compile(r'\{\{\s*role\s+"(?P<role>system|user)"\s*\}\}')

_env = Environment(
    undefined=StrictUndefined,
    autoescape=False,
    keep_trailing_newline=False,
)


# ── Template ────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class PromptTemplate:
    """A parsed, immutable prompt definition."""

    name: str
    model: str | None = None
    temperature: float | None = None
    max_tokens: int | None = None
    json_mode: bool = False
    output_schema: Mapping[str, Any] | None = None
    sections: tuple[tuple[str, Template], ...] = field(default=(), compare=False)

    def render(
        self, variables: Mapping[str, Any], *, default_model: str = ""
    ) -> RenderedPrompt:
        """Substitute *variables* into the template and build the request."""
        system_parts: list[str] = []
        user_parts: list[str] = []
        try:
            for role, template in self.sections:
                text = template.render(**variables).strip()
                if not text:
                    continue
                (system_parts if role == "system" else user_parts).append(text)
        except TemplateError as exc:
            raise PromptRenderError(
                f"Failed to render prompt '{self.name}': {exc}"
            ) from exc

        if self.output_schema:
            system_parts.append(_output_instruction(self.output_schema))

        return RenderedPrompt(
            model=self.model or default_model,
            system="\n\n".join(system_parts) or None,
            user="\n\n".join(user_parts),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            json_mode=self.json_mode,
        )


def _output_instruction(schema: Mapping[str, Any]) -> str:
    return (
        "Output should be in JSON format and conform to the following schema:\n\n"
        f"```\n{json.dumps(schema, indent=2)}\n```"
    )


# ── Parsing ─────────────────────────────────────────────────────────────────


def parse_prompt(name: str, source: str) -> PromptTemplate:
    """Parse the text of a ``.prompt`` file into a :class:`PromptTemplate`."""
    meta: dict[str, Any] = {}
    body = source
    match = _FRONT_MATTER_RE.match(source)
    if match:
        try:
            loaded = yaml.safe_load(match["meta"]) or {}
        except yaml.YAMLError as exc:
            raise PromptRenderError(f"Invalid front matter in prompt '{name}': {exc}") from exc
        if not isinstance(loaded, dict):
            raise PromptRenderError(f"Front matter of prompt '{name}' must be a mapping.")
        meta = loaded
        body = match["body"]

    config = meta.get("config") or {}
    output = meta.get("output") or {}

    model = meta.get("model")
    if model:
        # "anthropic/claude-..." → "claude-..."
        model = str(model).rpartition("/")[2]

    temperature = config.get("temperature")
    max_tokens = config.get("maxOutputTokens")
    schema = output.get("schema")

    return PromptTemplate(
        name=name,
        model=model,
        temperature=float(temperature) if temperature is not None else None,
        max_tokens=int(max_tokens) if max_tokens is not None else None,
        json_mode=str(output.get("format", "")).lower() == "json",
        output_schema=_to_json_schema(schema) if isinstance(schema, dict) else None,
        sections=_compile_sections(name, body),
    )


def _compile_sections(name: str, body: str) -> tuple[tuple[str, Template], ...]:
    """Split *body* on role markers and compile each chunk."""
    sections: list[tuple[str, Template]] = []
    role = "user"
    pos = 0
    try:
        for marker in _ROLE_RE.finditer(body):
            chunk = body[pos : marker.start()]
            if chunk.strip():
                sections.append((role, _env.from_string(chunk)))
            role = marker["role"]
            pos = marker.end()
        tail = body[pos:]
        if tail.strip():
            sections.append((role, _env.from_string(tail)))
    except TemplateError as exc:
        raise PromptRenderError(f"Invalid template syntax in prompt '{name}': {exc}") from exc
    return tuple(sections)


def _to_json_schema(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Expand a compact ``field: type, description`` mapping into JSON Schema.

    A trailing ``?`` on the field name marks it optional.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []
    for raw_key, spec in fields.items():
        key = str(raw_key)
        optional = key.endswith("?")
        key = key.rstrip("?")

        type_name, _, description = str(spec).partition(",")
        prop: dict[str, Any] = {"type": type_name.strip()}
        if description.strip():
            prop["description"] = description.strip()
        properties[key] = prop
        if not optional:
            required.append(key)

    return {
        "type": "object",
        "properties": properties,
        "required": required,
        "additionalProperties": False,
    }


# ── Store ───────────────────────────────────────────────────────────────────


class PromptStore:
    """Read-only collection of prompt templates keyed by name."""

    def __init__(
        self,
        templates: Mapping[str, PromptTemplate] | None = None,
        default_model: str = "",
    ) -> None:
        self._templates: Mapping[str, PromptTemplate] = MappingProxyType(
            dict(templates or {})
        )
        self._default_model = default_model

    @classmethod
    def load(cls, directory: str | Path, default_model: str = "") -> PromptStore:
        """Read every ``*.prompt`` file in *directory* (non-recursive)."""
        path = Path(directory)
        if not path.is_dir():
            logger.warning("Prompt directory %s does not exist, no prompts loaded", path)
            return cls({}, default_model)

        templates: dict[str, PromptTemplate] = {}
        for file in sorted(path.glob(f"*{PROMPT_SUFFIX}")):
            name = file.name[: -len(PROMPT_SUFFIX)]
            templates[name] = parse_prompt(name, file.read_text(encoding="utf-8"))
            logger.debug("Loaded prompt %s from %s", name, file)

        logger.info("Loaded %d prompt(s) from %s", len(templates), path)
        return cls(templates, default_model)

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def lookup(self, name: str) -> BoundPrompt:
        """Return the template registered as *name*."""
        try:
            template = self._templates[name]
        except KeyError:
            raise PromptNotFoundError(f"Prompt not found: {name}") from None
        return BoundPrompt(template, self._default_model)


@dataclass(frozen=True, slots=True)
class BoundPrompt:
    """A template paired with the store's fallback model."""

    template: PromptTemplate
    default_model: str

    @property
    def name(self) -> str:
        return self.template.name

    def render(self, variables: Mapping[str, Any]) -> RenderedPrompt:
        return self.template.render(variables, default_model=self.default_model)
