import json
from typing import Any

from lqa.llm.llm_client import LLMClient
from lqa.llm.schemas import VERIFICATION_SCHEMA_NAME

# Völlig deterministischer Report mit genau einem klaren Formatierungsfehler.
FAKE_REPORT = {
    "screenshotId": "fake",
    "overall": {
        "qualityLevel": "Good",
        "scores": {
            "accuracy": 5,
            "terminology": 5,
            "layout": 5,
            "grammar": 5,
            "formatting": 4,
            "localizationTone": 5,
        },
        "sceneDescription": "Settings page with toggle switches.",
        "mainProblemsSummary": "Date uses the en-US format.",
    },
    "issues": [
        {
            "id": "Issue-01",
            "location": "Footer, last-updated label",
            "issueCategory": "Formatting",
            "severity": "Major",
            "sourceText": "Updated 02/12/2026",
            "targetText": "Aktualisiert 02/12/2026",
            "description": "Date keeps the en-US MM/DD/YYYY order.",
            "suggestionRationale": "German users read this as 2 December.",
            "suggestionsTarget": ["Aktualisiert am 12.02.2026"],
        }
    ],
    "summary": {
        "severeCount": 0,
        "majorCount": 1,
        "minorCount": 0,
        "optimizationAdvice": "Use locale-aware date formatting.",
    },
}

FAKE_VERIFICATION = {
    "verifiedIssues": [
        {"id": "Issue-01", "isValid": True, "reason": "Date format is visibly en-US."}
    ]
}


class FakeLLMClient(LLMClient):
    def complete(self, prompt: str, **kwargs: Any) -> str:
        schema = kwargs.get("response_schema") or {}
        if schema.get("name") == VERIFICATION_SCHEMA_NAME:
            return json.dumps(FAKE_VERIFICATION)
        return json.dumps(FAKE_REPORT)
