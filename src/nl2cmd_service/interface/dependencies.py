"""FastAPI dependency injection wiring."""

from __future__ import annotations

from nl2cmd_service.infrastructure.config import get_settings
from nl2cmd_service.infrastructure.openai_adapter import OpenAICompatAdapter
from nl2cmd_service.infrastructure.prompt_store import PromptStore
from nl2cmd_service.services.nl2cmd_flow import Nl2CmdFlow

_prompt_store: PromptStore | None = None
_llm_adapter: OpenAICompatAdapter | None = None


async def startup() -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _prompt_store, _llm_adapter  # noqa: PLW0603

    settings = get_settings()
    _prompt_store = PromptStore.load(settings.prompt_dir, settings.default_model)
    _llm_adapter = OpenAICompatAdapter(
        api_key=settings.claude_api_key.get_secret_value(),
        base_url=settings.provider_base_url,
    )


async def shutdown() -> None:
    """Release shared resources."""
    global _prompt_store, _llm_adapter  # noqa: PLW0603

    if _llm_adapter:
        await _llm_adapter.close()
        _llm_adapter = None
    _prompt_store = None


def get_flow() -> Nl2CmdFlow:
    """Build the flow with the process-wide prompt store and provider client."""
    assert _prompt_store is not None, "startup() was not called"
    assert _llm_adapter is not None, "startup() was not called"

    return Nl2CmdFlow(prompts=_prompt_store, llm_gateway=_llm_adapter)
