"""
ReportReconciler: deterministische Nachbearbeitung nach dem Verifier.

1. Halluzinations-Schutz: Terminology-Issues ohne gültige Glossar-ID
   werden zu Style/Minor herabgestuft
2. Score-Konsistenz: Scores werden durch Critical/Major-Issues nach oben
   begrenzt (nur absenken, nie anheben)
3. Quality-Level: immer aus den Issue-Zahlen berechnet

Zusätzlich werden die Zähler im Summary aus der finalen Issue-Liste neu
berechnet.
"""

import logging
from collections import Counter
from typing import Dict, Iterable, Optional

from lqa.models.pydantic import SCORE_MAX, Issue, QualityLevel, Report, Scores
from lqa.services.glossary import extract_term_ids

logger = logging.getLogger(__name__)

AUTO_DOWNGRADE_MARKER = "[Auto-Downgraded]"
DOWNGRADE_REASON = "(Reason: Terminology ID not found in glossary)"
UNGROUNDED_GLOSSARY_SOURCE = "LLM Knowledge (Downgraded)"

# Kategorie -> Score-Dimension ("Other" hat keine eigene Dimension)
CATEGORY_DIMENSIONS: Dict[str, str] = {
    "Mistranslation": "accuracy",
    "Terminology": "terminology",
    "Layout": "layout",
    "Grammar": "grammar",
    "Formatting": "formatting",
    "Style": "tone",
}

SEVERITY_SCORE_BOUNDS: Dict[str, float] = {
    "Critical": 2.0,
    "Major": 3.0,
}


def normalize_term_id(raw: Optional[str]) -> Optional[str]:
    """'TERM-001' und '[ID:TERM-001]' werden gleich behandelt."""
    if not raw:
        return None
    value = raw.strip()
    if value.startswith("[ID:") and value.endswith("]"):
        value = value[4:-1].strip()
    return value or None


def _downgrade(issue: Issue) -> None:
    issue.category = "Style"
    issue.severity = "Minor"
    issue.description = f"{AUTO_DOWNGRADE_MARKER} {issue.description} {DOWNGRADE_REASON}"
    issue.glossary_term_id = None
    issue.glossary_source = UNGROUNDED_GLOSSARY_SOURCE


def sanitize_report(report: Report, glossary_text: Optional[str]) -> Report:
    """
    Terminology-Issues müssen auf eine Glossar-ID zeigen, die im Glossar
    tatsächlich vorkommt. Ohne Glossar gibt es keine gültigen IDs.

    Idempotent: herabgestufte Issues sind Style und werden nicht erneut
    angefasst.
    """
    valid_ids = extract_term_ids(glossary_text)

    for issue in report.issues:
        if issue.category != "Terminology":
            continue
        term_id = normalize_term_id(issue.glossary_term_id)
        if term_id and term_id in valid_ids:
            continue
        logger.warning(
            "[Hallucination Guard] Downgrading Terminology issue %s - invalid ID: %s",
            issue.id,
            issue.glossary_term_id,
        )
        _downgrade(issue)

    if not any(issue.category == "Terminology" for issue in report.issues):
        report.overall.scores.terminology = SCORE_MAX
    return report


def enforce_score_consistency(issues: Iterable[Issue], scores: Scores) -> Scores:
    """Neue Scores; keine Dimension liegt über der Schranke ihres schwersten Issues."""
    bounds: Dict[str, float] = {}
    for issue in issues:
        dimension = CATEGORY_DIMENSIONS.get(issue.category)
        bound = SEVERITY_SCORE_BOUNDS.get(issue.severity)
        if dimension is None or bound is None:
            continue
        bounds[dimension] = min(bounds.get(dimension, SCORE_MAX), bound)

    update = {
        dimension: min(getattr(scores, dimension), bound)
        for dimension, bound in bounds.items()
    }
    return scores.model_copy(update=update)


def count_by_severity(issues: Iterable[Issue]) -> Counter:
    return Counter(issue.severity for issue in issues)


def determine_quality_level(issues: Iterable[Issue]) -> QualityLevel:
    counts = count_by_severity(issues)
    if counts["Critical"]:
        return "Critical"
    if counts["Major"] >= 2:
        return "Poor"
    if counts["Major"] == 1 or counts["Minor"] >= 4:
        return "Average"
    if counts["Minor"]:
        return "Good"
    return "Perfect"


def recount_summary(report: Report) -> Report:
    counts = count_by_severity(report.issues)
    report.summary.severe_count = counts["Critical"]
    report.summary.major_count = counts["Major"]
    report.summary.minor_count = counts["Minor"]
    return report


class ReportReconciler:
    def reconcile(self, report: Report, glossary_text: Optional[str] = None) -> Report:
        sanitize_report(report, glossary_text)
        report.overall.scores = enforce_score_consistency(report.issues, report.overall.scores)
        report.overall.quality_level = determine_quality_level(report.issues)
        recount_summary(report)
        return report
