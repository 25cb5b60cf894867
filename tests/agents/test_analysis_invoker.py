"""
Tests für den AnalysisInvoker mit gemocktem LLM.

Geprüft wird insbesondere:
- Retry/Fallback bei leeren Antworten
- Entfernen von Code-Fences
- dass die Request-ID immer vom Aufrufer stammt
"""

import json

import pytest

from lqa.core.config import settings
from lqa.core.errors import ConfigurationError, RetryExhaustedError
from lqa.llm.llm_client import LLMClient
from lqa.llm.openai_client import OpenAIClient
from lqa.llm.schemas import REPORT_SCHEMA_NAME
from lqa.models.pydantic import AnalysisRequest
from lqa.services.agents.analysis.analysis_invoker import AnalysisInvoker

from conftest import PNG_DATA_URL, StubImageLoader, report_payload


class ScriptedLLMClient(LLMClient):
    """Gibt pro Call die nächste Antwort zurück (Exceptions werden geworfen)."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def complete(self, prompt, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def _request(**overrides):
    data = {
        "source_image": PNG_DATA_URL,
        "target_image": PNG_DATA_URL,
        "target_language": "de-DE",
        "request_id": "shot-42",
    }
    data.update(overrides)
    return AnalysisRequest(**data)


def _invoker(llm, sleeps, retries=2, loader=None):
    return AnalysisInvoker(
        llm,
        image_loader=loader or StubImageLoader(),
        models=("primary-model", "fallback-model"),
        retries=retries,
        base_delay_ms=1000,
        sleep=sleeps.append,
    )


def test_success_stamps_request_id_and_model(sleeps):
    llm = ScriptedLLMClient([json.dumps(report_payload(screenshot_id="made-up-by-model"))])

    outcome = _invoker(llm, sleeps).analyze(_request(), "SYSTEM", "USER")

    assert outcome.report.request_id == "shot-42"
    assert outcome.report.model == "primary-model"
    assert len(outcome.images) == 2

    call = llm.calls[0]
    assert call["model"] == "primary-model"
    assert call["system_prompt"] == "SYSTEM"
    assert call["response_schema"]["name"] == REPORT_SCHEMA_NAME
    assert call["temperature"] <= 0.3
    assert len(call["images"]) == 2


def test_empty_twice_then_fallback_succeeds(sleeps):
    llm = ScriptedLLMClient(["", "", json.dumps(report_payload())])

    outcome = _invoker(llm, sleeps, retries=1).analyze(_request(), "S", "U")

    assert outcome.report.model == "fallback-model"
    assert [c["model"] for c in llm.calls] == ["primary-model", "primary-model", "fallback-model"]
    assert sleeps == [1.0]


def test_default_budget_retries_three_times_per_model(sleeps):
    llm = ScriptedLLMClient(["", "{broken", "", json.dumps(report_payload())])

    outcome = _invoker(llm, sleeps).analyze(_request(), "S", "U")

    assert outcome.report.model == "fallback-model"
    assert sleeps == [1.0, 2.0]


def test_code_fenced_response_is_parsed(sleeps):
    llm = ScriptedLLMClient([f"```json\n{json.dumps(report_payload())}\n```"])

    outcome = _invoker(llm, sleeps).analyze(_request(), "S", "U")

    assert outcome.report.issues[0].id == "Issue-01"
    assert sleeps == []


def test_images_are_loaded_once_across_retries(sleeps):
    loader = StubImageLoader()
    llm = ScriptedLLMClient(["", "", json.dumps(report_payload())])

    _invoker(llm, sleeps, loader=loader).analyze(_request(), "S", "U")

    assert loader.calls == 1


def test_image_failures_are_retried_and_exhaust(sleeps):
    loader = StubImageLoader(fail_on=["broken.png"])
    llm = ScriptedLLMClient([])

    with pytest.raises(RetryExhaustedError):
        _invoker(llm, sleeps, loader=loader).analyze(_request(source_image="broken.png"), "S", "U")

    assert loader.calls == 6
    assert llm.calls == []


def test_all_attempts_empty_raises(sleeps):
    llm = ScriptedLLMClient([""] * 6)

    with pytest.raises(RetryExhaustedError) as exc_info:
        _invoker(llm, sleeps).analyze(_request(), "S", "U")

    assert len(exc_info.value.attempts) == 6


def test_configuration_error_propagates_without_retry(sleeps):
    llm = ScriptedLLMClient([ConfigurationError("OPENAI_API_KEY is not set.")])

    with pytest.raises(ConfigurationError):
        _invoker(llm, sleeps).analyze(_request(), "S", "U")

    assert len(llm.calls) == 1
    assert sleeps == []


def test_missing_api_key_fails_before_loading_images(monkeypatch, sleeps):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.setattr(settings, "openai_api_key", None)
    loader = StubImageLoader(fail_on=["https://cdn.example.com/slow.png"])

    with pytest.raises(ConfigurationError):
        _invoker(OpenAIClient(), sleeps, loader=loader).analyze(
            _request(source_image="https://cdn.example.com/slow.png"), "S", "U"
        )

    assert loader.calls == 0
    assert sleeps == []
