"""Tests for TaskGenerator."""

import json
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from cli.config_models import RetryConfig
from llm import LLMError, LLMProvider
from observability import metrics
from shared_types import Priority
from tasks.context import GitHubContext, RepoInfo
from tasks.generator import TaskGenerator


class FakeLLM(LLMProvider):
    provider_name = "fake"

    def __init__(self, responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, messages, system=None, max_tokens=1500):
        self.prompts.append(messages[-1]["content"])
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


FIXED_NOW = datetime(2024, 3, 15, 9, 30)
NO_WAIT = RetryConfig(max_attempts=2, min_wait=0, max_wait=0, llm_max_wait=0)


def _generator(llm, store, github=None):
    return TaskGenerator(llm, store, github=github, retry_config=NO_WAIT, clock=lambda: FIXED_NOW)


class TestGenerate:
    def test_success_persists_artifact(self, store):
        payload = {"tasks": [{"title": "Review PR", "priority": "high"}, {"title": "Write docs"}]}
        llm = FakeLLM([f"```json\n{json.dumps(payload)}\n```"])
        artifact = _generator(llm, store).generate("work")

        assert not artifact.is_error
        assert artifact.category == "work"
        assert artifact.generated_at == "2024-03-15T09:30:00"
        assert [t.title for t in artifact.tasks] == ["Review PR", "Write docs"]
        assert artifact.tasks[0].priority == Priority.HIGH

        saved = store.get("work", "2024-03-15")
        assert saved.to_dict() == artifact.to_dict()

    def test_prompt_includes_context(self, store):
        github = MagicMock()
        github.fetch.return_value = GitHubContext(
            repos=[RepoInfo(name="jarvis", language="Python", description="assistant")]
        )
        llm = FakeLLM(["- one"])
        _generator(llm, store, github=github).generate("learning")

        prompt = llm.prompts[0]
        assert "jarvis (Python): assistant" in prompt
        assert "2024-03-15" in prompt
        assert "morning" in prompt

    def test_retries_transient_failure(self, store):
        llm = FakeLLM([LLMError("overloaded"), "- recovered"])
        artifact = _generator(llm, store).generate("market")
        assert [t.title for t in artifact.tasks] == ["recovered"]
        assert metrics.get("llm_errors") == 1

    def test_failure_persists_error_artifact(self, store):
        llm = FakeLLM([LLMError("timeout"), LLMError("timeout")])
        artifact = _generator(llm, store).generate("market")

        assert artifact.is_error
        assert artifact.error == "timeout"
        assert artifact.tasks == []
        assert store.get("market", "2024-03-15").is_error

    def test_unparseable_response_still_saved(self, store):
        llm = FakeLLM(["Sorry, no ideas today."])
        artifact = _generator(llm, store).generate("work")
        assert len(artifact.tasks) == 1
        assert artifact.tasks[0].priority == Priority.HIGH
        assert artifact.raw_text == "Sorry, no ideas today."

    def test_unknown_category(self, store):
        with pytest.raises(ValueError):
            _generator(FakeLLM(["- a"]), store).generate("health")
