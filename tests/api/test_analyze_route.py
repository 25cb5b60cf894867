"""
API-Tests für die LQA-Routen.

Für /analyze wird LqaService.analyze gepatcht bzw. (im TEST_MODE) die
Pipeline mit dem FakeLLMClient durchlaufen. Geprüft werden Routing,
Serialisierung (camelCase wie das Backend-Schema) und das Mapping der
Fehler auf HTTP-Statuscodes.
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from lqa.api import routes
from lqa.api.routes import router
from lqa.core.errors import ConfigurationError, RetryExhaustedError
from lqa.models.pydantic import Report
from lqa.services.lqa_service import LqaService

from conftest import PNG_DATA_URL, report_payload


@pytest.fixture
def client():
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def _body(**overrides):
    body = {
        "source_image": PNG_DATA_URL,
        "target_image": PNG_DATA_URL,
        "target_language": "de-DE",
        "scene_hint": "settings page",
        "request_id": "api-1",
    }
    body.update(overrides)
    return body


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_analyze_returns_camel_case_report(monkeypatch, client):
    report = Report.model_validate(report_payload())
    report.request_id = "api-1"

    def fake_analyze(self, req):
        assert req.request_id == "api-1"
        return report

    monkeypatch.setattr(LqaService, "analyze", fake_analyze)

    resp = client.post("/analyze", json=_body())

    assert resp.status_code == 200
    data = resp.json()["report"]
    assert data["screenshotId"] == "api-1"
    assert data["issues"][0]["issueCategory"] == "Layout"
    assert data["issues"][0]["suggestionsTarget"] == ["Speichern"]
    assert "localizationTone" in data["overall"]["scores"]


def test_analyze_end_to_end_in_test_mode(client):
    resp = client.post("/analyze", json=_body())

    assert resp.status_code == 200
    data = resp.json()["report"]
    assert data["screenshotId"] == "api-1"
    assert data["overall"]["qualityLevel"] == "Average"
    assert data["verified"] is True


def test_missing_request_id_is_422(client):
    body = _body()
    del body["request_id"]
    assert client.post("/analyze", json=body).status_code == 422


def test_retry_exhausted_is_502(monkeypatch, client):
    def fake_analyze(self, req):
        raise RetryExhaustedError("Analysis failed on all models", attempts=["a", "b"])

    monkeypatch.setattr(LqaService, "analyze", fake_analyze)

    resp = client.post("/analyze", json=_body())

    assert resp.status_code == 502
    assert "all models" in resp.json()["detail"]


def test_configuration_error_is_500(monkeypatch, client):
    def fake_analyze(self, req):
        raise ConfigurationError("OPENAI_API_KEY is not set.")

    monkeypatch.setattr(LqaService, "analyze", fake_analyze)

    resp = client.post("/analyze", json=_body())

    assert resp.status_code == 500
    assert resp.json()["detail"].startswith("Configuration error")


def test_bulk_counts_failures(monkeypatch, client):
    # fehlendes Bild wird wiederholt, ohne echte Wartezeit
    monkeypatch.setattr(routes.lqa_service.pipeline.analysis_invoker, "sleep", lambda s: None)

    resp = client.post(
        "/analyze/bulk",
        json={"requests": [_body(request_id="ok"), _body(request_id="bad", source_image="/nope/missing.png")]},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert (data["succeeded"], data["failed"]) == (1, 1)
    assert data["results"][0]["report"]["screenshotId"] == "ok"
    assert data["results"][1]["error"]


def test_compile_glossary(client):
    resp = client.post(
        "/glossary/compile",
        json={"files": [{"name": "glossary_de.txt", "terms": ["Save = Speichern", "no separator"]}]},
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["text"] == "[ID:TERM-001] Save = Speichern [source: glossary_de.txt]"
    assert data["term_count"] == 1
    assert data["detected_language"] == "de-DE"


def test_compile_glossary_keeps_files_with_same_name(client):
    resp = client.post(
        "/glossary/compile",
        json={
            "files": [
                {"name": "glossary_de.txt", "terms": ["Save = Speichern"]},
                {"name": "glossary_de.txt", "terms": ["Cancel = Abbrechen"]},
            ]
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["term_count"] == 2
    assert data["text"].splitlines() == [
        "[ID:TERM-001] Save = Speichern [source: glossary_de.txt]",
        "[ID:TERM-002] Cancel = Abbrechen [source: glossary_de.txt]",
    ]


def test_skills_preview(client):
    resp = client.get("/skills", params={"scene_hint": "settings page with toggle switches", "target_language": "fr-FR"})

    data = resp.json()
    assert data["scene_type"] == "settings"
    assert data["scene_skills"] == ["settings_toggle_labels", "settings_section_headers"]
    assert "compound_word_detection" not in data["general_skills"]
    assert data["prompt_block"].startswith("=== RETRIEVED LQA SKILLS")
