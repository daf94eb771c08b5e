"""Shared fixtures: an in-memory prompt store and a stubbed LLM gateway."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from nl2cmd_service.infrastructure.prompt_store import PromptStore
from nl2cmd_service.interface.app import create_app
from nl2cmd_service.interface.dependencies import get_flow
from nl2cmd_service.services.nl2cmd_flow import Nl2CmdFlow

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "prompts"


@pytest.fixture
def prompt_store() -> PromptStore:
    return PromptStore.load(PROMPTS_DIR, default_model="fallback-model")


@pytest.fixture
def empty_store() -> PromptStore:
    return PromptStore({})


@pytest.fixture
def fake_llm() -> AsyncMock:
    llm = AsyncMock()
    llm.complete.return_value = '{"cmd": "ls -la", "runnable": true}'
    return llm


@pytest.fixture
def flow(prompt_store: PromptStore, fake_llm: AsyncMock) -> Nl2CmdFlow:
    return Nl2CmdFlow(prompts=prompt_store, llm_gateway=fake_llm)


@pytest.fixture
def client(flow: Nl2CmdFlow) -> TestClient:
    # No ``with`` block: the lifespan (real provider client) is never started.
    app = create_app()
    app.dependency_overrides[get_flow] = lambda: flow
    return TestClient(app, raise_server_exceptions=False)
