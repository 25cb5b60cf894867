"""
Strikte Output-Schemata für das Generierungs-Backend.

Das Modell soll exakt diese Struktur liefern; die Pydantic-Modelle in
lqa.models.pydantic validieren die Antwort danach noch einmal.
"""

from lqa.models.pydantic import ISSUE_CATEGORIES, QUALITY_LEVELS, SEVERITIES

REPORT_SCHEMA_NAME = "lqa_report"
VERIFICATION_SCHEMA_NAME = "lqa_verification"

_ISSUE_SCHEMA = {
    "type": "object",
    "properties": {
        "id": {"type": "string", "description": "e.g., Issue-01"},
        "location": {"type": "string", "description": "Where the issue is located in the UI"},
        "issueCategory": {"type": "string", "enum": list(ISSUE_CATEGORIES)},
        "severity": {"type": "string", "enum": list(SEVERITIES)},
        "sourceText": {"type": "string"},
        "targetText": {"type": "string"},
        "description": {"type": "string", "description": "Detailed explanation of the issue"},
        "suggestionRationale": {
            "type": "string",
            "description": (
                "A short, persuasive explanation for the developer (non-native speaker) on WHY "
                "this must be fixed. E.g., 'Prevents UI breakage' or 'Standard industry convention'."
            ),
        },
        "suggestionsTarget": {
            "type": "array",
            "items": {"type": "string"},
            "minItems": 1,
            "description": (
                "MANDATORY. Provide at least one actionable fix. For Truncation: provide a shorter "
                "translation/abbreviation. For Layout: suggest 'Resize container' or similar. NEVER leave empty."
            ),
        },
        "glossarySource": {
            "type": "string",
            "description": (
                "REQUIRED for Terminology issues ONLY. The exact filename from the [source: filename] "
                "tag of the matched glossary term."
            ),
        },
        "glossaryTermId": {
            "type": "string",
            "description": (
                "REQUIRED for Terminology issues. Must match the [ID:TERM-xxx] tag from the glossary "
                "context exactly, e.g. TERM-001."
            ),
        },
    },
    "required": [
        "id",
        "location",
        "issueCategory",
        "severity",
        "description",
        "suggestionRationale",
        "suggestionsTarget",
    ],
}

_SCORES_SCHEMA = {
    "type": "object",
    "properties": {
        name: {"type": "number", "minimum": 0, "maximum": 5}
        for name in (
            "accuracy",
            "terminology",
            "layout",
            "grammar",
            "formatting",
            "localizationTone",
        )
    },
    "required": ["accuracy", "terminology", "layout", "grammar", "formatting", "localizationTone"],
}

_OVERALL_SCHEMA = {
    "type": "object",
    "properties": {
        "qualityLevel": {"type": "string", "enum": list(QUALITY_LEVELS)},
        "scores": _SCORES_SCHEMA,
        "sceneDescription": {"type": "string"},
        "mainProblemsSummary": {"type": "string"},
    },
    "required": ["qualityLevel", "scores", "sceneDescription", "mainProblemsSummary"],
}

_SUMMARY_SCHEMA = {
    "type": "object",
    "properties": {
        "severeCount": {"type": "number"},
        "majorCount": {"type": "number"},
        "minorCount": {"type": "number"},
        "optimizationAdvice": {"type": "string"},
        "termAdvice": {"type": "string"},
    },
    "required": ["severeCount", "majorCount", "minorCount", "optimizationAdvice"],
}

REPORT_RESPONSE_SCHEMA = {
    "name": REPORT_SCHEMA_NAME,
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "screenshotId": {"type": "string"},
            "overall": _OVERALL_SCHEMA,
            "issues": {"type": "array", "items": _ISSUE_SCHEMA},
            "summary": _SUMMARY_SCHEMA,
        },
        "required": ["overall", "issues", "summary"],
    },
}

VERIFICATION_RESPONSE_SCHEMA = {
    "name": VERIFICATION_SCHEMA_NAME,
    "strict": False,
    "schema": {
        "type": "object",
        "properties": {
            "verifiedIssues": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "id": {"type": "string", "description": "The Issue ID from the input list"},
                        "isValid": {
                            "type": "boolean",
                            "description": "True if the issue is a real bug; False if it is a hallucination or negligible",
                        },
                        "reason": {"type": "string", "description": "Brief explanation for the verdict"},
                        "refinedSeverity": {"type": "string", "enum": list(SEVERITIES)},
                        "refinedRationale": {"type": "string"},
                    },
                    "required": ["id", "isValid", "reason"],
                },
            }
        },
        "required": ["verifiedIssues"],
    },
}
