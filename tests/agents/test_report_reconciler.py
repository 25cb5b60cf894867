"""
Tests für den ReportReconciler: Halluzinations-Schutz, Score-Konsistenz,
Quality-Level und Summary-Zähler.
"""

import pytest

from lqa.models.pydantic import Issue, Report
from lqa.services.agents.reconciliation.report_reconciler import (
    AUTO_DOWNGRADE_MARKER,
    DOWNGRADE_REASON,
    UNGROUNDED_GLOSSARY_SOURCE,
    ReportReconciler,
    determine_quality_level,
    enforce_score_consistency,
    normalize_term_id,
    sanitize_report,
)

from conftest import issue_payload, report_payload

GLOSSARY = "[ID:TERM-001] Save = Speichern [source: glossary_de.txt]"


def _report(*issues, **kwargs):
    return Report.model_validate(report_payload(issues=list(issues), **kwargs))


def _issues(*severities):
    return [Issue.model_validate(issue_payload(f"I-{n}", "Layout", s)) for n, s in enumerate(severities)]


def test_grounded_terminology_issue_is_unchanged():
    report = _report(issue_payload("T-1", "Terminology", "Major", glossaryTermId="TERM-001"))
    before = report.model_dump()

    sanitize_report(report, GLOSSARY)

    assert report.model_dump() == before
    assert report.overall.scores.terminology == 4


def test_unknown_term_id_is_downgraded():
    report = _report(issue_payload("T-1", "Terminology", "Major", glossaryTermId="TERM-999"))
    description = report.issues[0].description

    sanitize_report(report, GLOSSARY)

    issue = report.issues[0]
    assert issue.category == "Style"
    assert issue.severity == "Minor"
    assert issue.description == f"{AUTO_DOWNGRADE_MARKER} {description} {DOWNGRADE_REASON}"
    assert issue.glossary_term_id is None
    assert issue.glossary_source == UNGROUNDED_GLOSSARY_SOURCE
    assert report.overall.scores.terminology == 5


def test_missing_term_id_is_downgraded():
    report = _report(issue_payload("T-1", "Terminology", "Critical"))
    sanitize_report(report, GLOSSARY)
    assert report.issues[0].category == "Style"


def test_without_glossary_every_terminology_issue_is_downgraded():
    report = _report(issue_payload("T-1", "Terminology", "Major", glossaryTermId="TERM-001"))
    sanitize_report(report, None)
    assert report.issues[0].category == "Style"
    assert report.overall.scores.terminology == 5


def test_echoed_tag_form_is_accepted():
    assert normalize_term_id("[ID:TERM-001]") == "TERM-001"
    assert normalize_term_id(" TERM-001 ") == "TERM-001"
    assert normalize_term_id("") is None

    report = _report(issue_payload("T-1", "Terminology", "Major", glossaryTermId="[ID:TERM-001]"))
    sanitize_report(report, GLOSSARY)
    assert report.issues[0].category == "Terminology"


def test_remaining_terminology_issue_keeps_score():
    report = _report(
        issue_payload("T-1", "Terminology", "Major", glossaryTermId="TERM-001"),
        issue_payload("T-2", "Terminology", "Major", glossaryTermId="TERM-404"),
    )
    sanitize_report(report, GLOSSARY)
    assert [i.category for i in report.issues] == ["Terminology", "Style"]
    assert report.overall.scores.terminology == 4


def test_sanitize_is_idempotent():
    report = _report(
        issue_payload("T-1", "Terminology", "Major", glossaryTermId="TERM-001"),
        issue_payload("T-2", "Terminology", "Major", glossaryTermId="TERM-404"),
        issue_payload("L-1", "Layout", "Critical"),
    )
    once = sanitize_report(report, GLOSSARY).model_dump()
    twice = sanitize_report(report, GLOSSARY).model_dump()
    assert once == twice


def test_non_terminology_issues_untouched():
    report = _report(issue_payload("L-1", "Layout", "Critical"))
    before = report.issues[0].model_dump()
    sanitize_report(report, None)
    assert report.issues[0].model_dump() == before


def test_scores_are_capped_by_severity():
    report = _report(
        issue_payload("L-1", "Layout", "Critical"),
        issue_payload("S-1", "Style", "Major"),
        issue_payload("O-1", "Other", "Critical"),
        issue_payload("G-1", "Grammar", "Minor"),
    )
    scores = report.overall.scores

    capped = enforce_score_consistency(report.issues, scores)

    assert capped.layout == 2.0
    assert capped.tone == 3.0
    assert capped.grammar == 5.0
    assert capped.accuracy == 5.0
    # neues Objekt, Original unverändert
    assert scores.layout == 4.5


def test_scores_are_never_raised():
    report = _report(
        issue_payload("L-1", "Layout", "Major"),
        scores={
            "accuracy": 1,
            "terminology": 1,
            "layout": 1,
            "grammar": 1,
            "formatting": 1,
            "localizationTone": 1,
        },
    )
    capped = enforce_score_consistency(report.issues, report.overall.scores)
    assert capped == report.overall.scores


@pytest.mark.parametrize(
    "severities, expected",
    [
        ([], "Perfect"),
        (["Minor"], "Good"),
        (["Minor"] * 3, "Good"),
        (["Minor"] * 4, "Average"),
        (["Major"], "Average"),
        (["Major", "Minor"], "Average"),
        (["Major", "Major"], "Poor"),
        (["Critical"], "Critical"),
        (["Minor", "Major", "Major", "Critical"], "Critical"),
    ],
)
def test_quality_level(severities, expected):
    assert determine_quality_level(_issues(*severities)) == expected


def test_reconcile_overwrites_model_label_and_counts():
    report = _report(
        issue_payload("T-1", "Terminology", "Critical", glossaryTermId="TERM-999"),
        issue_payload("L-1", "Layout", "Major"),
        quality_level="Perfect",
    )

    ReportReconciler().reconcile(report, GLOSSARY)

    assert report.overall.quality_level == "Average"
    assert report.overall.scores.layout == 3.0
    assert report.overall.scores.terminology == 5
    assert (report.summary.severe_count, report.summary.major_count, report.summary.minor_count) == (0, 1, 1)
