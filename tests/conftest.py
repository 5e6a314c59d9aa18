"""Pytest configuration for tests."""

import json
from typing import List, Optional, Tuple, Union

import pytest

from convo_summarizer.config import Settings
from convo_summarizer.summarizer.gateways.base import ModelGateway
from convo_summarizer.summarizer.service import SummarizationOrchestrator


Reply = Union[str, BaseException]


class ScriptedGateway(ModelGateway):
    """
    Gateway double that replays canned replies.

    ``replies`` maps a model id to the sequence of outcomes for its calls; an
    exception instance is raised, anything else is returned. When a model runs
    out of script, ``default`` is used.
    """

    name = "scripted"

    def __init__(self, replies: Optional[dict] = None, default: Reply = "") -> None:
        self.replies = {model: list(outcomes) for model, outcomes in (replies or {}).items()}
        self.default = default
        self.calls: List[Tuple[str, str, str, int]] = []

    async def invoke(self, model_id, system_prompt, user_prompt, max_tokens, temperature):
        self.calls.append((model_id, system_prompt, user_prompt, max_tokens))
        script = self.replies.get(model_id)
        outcome = script.pop(0) if script else self.default
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def models_called(self) -> List[str]:
        return [call[0] for call in self.calls]


def summary_json(**overrides) -> str:
    payload = {
        "title": "Sprint planning",
        "summary": "The team planned the sprint.",
        "bullets": ["Scope agreed"],
        "actionItems": ["Alice drafts the spec"],
        "speakerBreakdown": [
            {"speaker": "Alice", "keyPoints": ["Owns the spec"], "sentiment": "positive"}
        ],
        "skills": ["Planning"],
        "redFlags": [],
        "sentiment": "positive",
        "urgency": "medium",
        "confidence": 0.9,
    }
    payload.update(overrides)
    return json.dumps(payload)


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio to use only asyncio backend."""
    return "asyncio"


@pytest.fixture
def test_settings():
    return Settings(
        llm_provider="none",
        primary_model="primary/model",
        fallback_model="fallback/model",
        retry_backoff_ms=0,
        llm_attempt_timeout_s=5.0,
    )


@pytest.fixture
def make_orchestrator(test_settings):
    def factory(gateway: Optional[ModelGateway], settings: Optional[Settings] = None, **kwargs):
        return SummarizationOrchestrator(gateway, settings or test_settings, **kwargs)

    return factory
