"""Tests for the nl2cmd flow — the LLM is always stubbed."""

from __future__ import annotations

import pytest

from nl2cmd_service.domain.entities import CommandRequest, RenderedPrompt
from nl2cmd_service.domain.exceptions import NotFoundError, ProviderError, SchemaError
from nl2cmd_service.services.nl2cmd_flow import Nl2CmdFlow


@pytest.mark.asyncio
async def test_conformant_output_yields_result(flow, fake_llm):
    result = await flow.execute(CommandRequest("list all files including hidden ones"))

    assert isinstance(result.command, str) and result.command
    assert isinstance(result.runnable, bool)
    fake_llm.complete.assert_awaited_once()


@pytest.mark.asyncio
async def test_provider_receives_rendered_prompt(flow, fake_llm):
    await flow.execute(CommandRequest("show disk usage"))

    (prompt,), _ = fake_llm.complete.await_args
    assert isinstance(prompt, RenderedPrompt)
    assert prompt.user == "show disk usage"
    assert prompt.json_mode is True


@pytest.mark.asyncio
async def test_missing_template_skips_provider(empty_store, fake_llm):
    flow = Nl2CmdFlow(prompts=empty_store, llm_gateway=fake_llm)

    with pytest.raises(NotFoundError):
        await flow.execute(CommandRequest("anything"))
    fake_llm.complete.assert_not_awaited()


@pytest.mark.asyncio
async def test_provider_error_propagates_unchanged(flow, fake_llm):
    fake_llm.complete.side_effect = ProviderError("quota exceeded")

    with pytest.raises(ProviderError, match="quota exceeded"):
        await flow.execute(CommandRequest("anything"))


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", ["not json at all", '{"cmd": "ls"}'])
async def test_malformed_output_raises_schema_error(flow, fake_llm, raw):
    fake_llm.complete.return_value = raw

    with pytest.raises(SchemaError):
        await flow.execute(CommandRequest("anything"))


@pytest.mark.asyncio
async def test_raw_text_is_logged_on_schema_error(flow, fake_llm, caplog):
    fake_llm.complete.return_value = "sorry, I can't help"

    with caplog.at_level("ERROR"), pytest.raises(SchemaError):
        await flow.execute(CommandRequest("anything"))
    assert "sorry, I can't help" in caplog.text
