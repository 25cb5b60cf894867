import os

import pytest

os.environ.setdefault("TEST_MODE", "1")

from lqa.services.images import ProcessedImage  # noqa: E402

# Kleinster gültiger Payload: nur die PNG-Signatur
PNG_BASE64 = "iVBORw0KGgo="
PNG_DATA_URL = f"data:image/png;base64,{PNG_BASE64}"


def issue_payload(issue_id="Issue-01", category="Layout", severity="Major", **extra):
    """Issue im Wire-Format (camelCase), wie es das Backend liefert."""
    payload = {
        "id": issue_id,
        "location": "Top toolbar",
        "issueCategory": category,
        "severity": severity,
        "sourceText": "Save",
        "targetText": "Speich...",
        "description": f"{category} problem in the toolbar.",
        "suggestionRationale": "Prevents UI breakage.",
        "suggestionsTarget": ["Speichern"],
    }
    payload.update(extra)
    return payload


def report_payload(issues=None, scores=None, quality_level="Good", screenshot_id="model-id"):
    return {
        "screenshotId": screenshot_id,
        "overall": {
            "qualityLevel": quality_level,
            "scores": scores
            or {
                "accuracy": 5,
                "terminology": 4,
                "layout": 4.5,
                "grammar": 5,
                "formatting": 5,
                "localizationTone": 5,
            },
            "sceneDescription": "Toolbar with actions.",
            "mainProblemsSummary": "Truncated button label.",
        },
        "issues": issues if issues is not None else [issue_payload()],
        "summary": {
            "severeCount": 0,
            "majorCount": 0,
            "minorCount": 0,
            "optimizationAdvice": "Shorten labels.",
        },
    }


class StubImageLoader:
    """Liefert feste Bilder ohne Netzwerk; kann für bestimmte Referenzen scheitern."""

    def __init__(self, fail_on=None):
        self.fail_on = set(fail_on or [])
        self.calls = 0

    def load_pair(self, source, target):
        from lqa.core.errors import ImageLoadError

        self.calls += 1
        if source in self.fail_on or target in self.fail_on:
            raise ImageLoadError(f"cannot load {source}")
        image = ProcessedImage(mime_type="image/png", data=PNG_BASE64)
        return image, image


@pytest.fixture
def stub_image_loader():
    return StubImageLoader()


@pytest.fixture
def image_pair():
    image = ProcessedImage(mime_type="image/png", data=PNG_BASE64)
    return image, image


@pytest.fixture
def sleeps():
    """Sammelt die Wartezeiten (Sekunden), statt wirklich zu schlafen."""
    return []
