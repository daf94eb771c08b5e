"""Tests for the file-backed prompt store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nl2cmd_service.domain.exceptions import PromptNotFoundError, PromptRenderError
from nl2cmd_service.infrastructure.prompt_store import PromptStore, parse_prompt


class TestShippedPrompt:
    def test_nl2cmd_is_registered(self, prompt_store):
        assert "nl2cmd" in prompt_store.names

    def test_render_substitutes_description(self, prompt_store):
        rendered = prompt_store.lookup("nl2cmd").render(
            {"nl2cmd": "list all files including hidden ones"}
        )
        assert rendered.user == "list all files including hidden ones"
        assert rendered.system is not None
        assert "POSIX shell command" in rendered.system

    def test_front_matter_settings(self, prompt_store):
        rendered = prompt_store.lookup("nl2cmd").render({"nl2cmd": "x"})
        assert rendered.model == "claude-3-5-haiku-latest"
        assert rendered.temperature == pytest.approx(0.2)
        assert rendered.max_tokens == 512
        assert rendered.json_mode is True

    def test_output_schema_is_appended_to_system(self, prompt_store):
        rendered = prompt_store.lookup("nl2cmd").render({"nl2cmd": "x"})
        schema_text = rendered.system.split("```")[1]
        schema = json.loads(schema_text)
        assert schema["required"] == ["cmd", "runnable"]
        assert schema["properties"]["runnable"]["type"] == "boolean"

    def test_empty_description_is_passed_through(self, prompt_store):
        rendered = prompt_store.lookup("nl2cmd").render({"nl2cmd": ""})
        assert rendered.user == ""


class TestLookup:
    def test_missing_prompt_raises_not_found(self, empty_store):
        with pytest.raises(PromptNotFoundError, match="nl2cmd"):
            empty_store.lookup("nl2cmd")

    def test_missing_directory_gives_empty_store(self, tmp_path: Path):
        store = PromptStore.load(tmp_path / "nope")
        assert store.names == []

    def test_only_prompt_files_are_loaded(self, tmp_path: Path):
        (tmp_path / "a.prompt").write_text("hello {{ who }}", encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
        store = PromptStore.load(tmp_path)
        assert store.names == ["a"]

    def test_default_model_used_when_template_names_none(self, tmp_path: Path):
        (tmp_path / "a.prompt").write_text("hello {{ who }}", encoding="utf-8")
        store = PromptStore.load(tmp_path, default_model="claude-x")
        rendered = store.lookup("a").render({"who": "world"})
        assert rendered.model == "claude-x"
        assert rendered.system is None
        assert rendered.user == "hello world"


class TestParsePrompt:
    def test_body_without_front_matter_is_user_message(self):
        template = parse_prompt("p", "Say {{ word }}")
        rendered = template.render({"word": "hi"})
        assert rendered.user == "Say hi"
        assert rendered.json_mode is False

    def test_role_markers_split_messages(self):
        source = '{{role "system"}}\nBe terse.\n{{role "user"}}\n{{ q }}\n'
        rendered = parse_prompt("p", source).render({"q": "why?"})
        assert rendered.system == "Be terse."
        assert rendered.user == "why?"

    def test_optional_schema_field(self):
        source = "---\noutput:\n  schema:\n    a: string\n    b?: integer, a count\n---\nx"
        template = parse_prompt("p", source)
        assert template.output_schema["required"] == ["a"]
        assert template.output_schema["properties"]["b"] == {
            "type": "integer",
            "description": "a count",
        }

    def test_missing_variable_raises_render_error(self):
        template = parse_prompt("p", "hello {{ who }}")
        with pytest.raises(PromptRenderError):
            template.render({})

    def test_bad_template_syntax_raises(self):
        with pytest.raises(PromptRenderError):
            parse_prompt("p", "hello {{ who ")

    def test_bad_front_matter_raises(self):
        with pytest.raises(PromptRenderError):
            parse_prompt("p", "---\n- just\n- a list\n---\nbody")

    def test_store_is_read_only(self, prompt_store):
        with pytest.raises(TypeError):
            prompt_store._templates["other"] = None  # type: ignore[index]
