"""Natural-language → command flow — the whole request pipeline.

Resolve the ``nl2cmd`` prompt, render it with the caller's description, ask
the LLM, and validate what comes back.  The flow depends only on the two
ports; the interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import logging

from nl2cmd_service.domain.entities import CommandRequest, CommandResult
from nl2cmd_service.domain.exceptions import ProviderError, SchemaError
from nl2cmd_service.domain.ports.llm_gateway import LlmGateway
from nl2cmd_service.domain.ports.prompt_registry import PromptRegistry
from nl2cmd_service.services.output_parser import parse_command_output

logger = logging.getLogger(__name__)

FLOW_NAME = "nl2CmdFlow"
PROMPT_NAME = "nl2cmd"


class Nl2CmdFlow:
    """Stateless pipeline turning a description into a :class:`CommandResult`.

    Parameters
    ----------
    prompts:
        Read-only registry holding the ``nl2cmd`` template.
    llm_gateway:
        Adapter that sends rendered prompts to the LLM provider.
    """

    def __init__(self, prompts: PromptRegistry, llm_gateway: LlmGateway) -> None:
        self._prompts = prompts
        self._llm = llm_gateway

    async def execute(self, request: CommandRequest) -> CommandResult:
        """Run the pipeline once; every failure is terminal for the request."""
        logger.info("Received input: %r", request.description)

        prompt = self._prompts.lookup(PROMPT_NAME)
        rendered = prompt.render({PROMPT_NAME: request.description})

        logger.info("Executing prompt %s with model %s", prompt.name, rendered.model)
        try:
            raw = await self._llm.complete(rendered)
        except ProviderError as exc:
            logger.error("Execute error: %s", exc)
            raise

        try:
            result = parse_command_output(raw)
        except SchemaError as exc:
            logger.error("Error parsing response: %s", exc)
            logger.error("Raw text that failed to parse: %s", exc.raw_text)
            raise

        logger.info(
            "Successfully parsed response: cmd=%r runnable=%s",
            result.command,
            result.runnable,
        )
        return result
