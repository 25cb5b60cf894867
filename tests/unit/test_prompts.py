"""
Tests für die Prompt-Builder (rein, deterministisch, Sprachvarianten).
"""

import json

from lqa.models.pydantic import Issue
from lqa.services.prompts import (
    build_analysis_system_prompt,
    build_analysis_user_prompt,
    build_verification_system_prompt,
    build_verification_user_prompt,
)
from lqa.services.prompts.analysis_prompts import target_language_name

from conftest import issue_payload


def test_system_prompt_is_pure():
    a = build_analysis_system_prompt("de-DE", "en", "SKILLS")
    b = build_analysis_system_prompt("de-DE", "en", "SKILLS")
    assert a == b


def test_system_prompt_injects_skill_block():
    prompt = build_analysis_system_prompt("de-DE", "en", "=== MY SKILLS ===")
    assert "=== MY SKILLS ===" in prompt
    assert "German (Deutsch)" in prompt


def test_report_language_switches_rules():
    en = build_analysis_system_prompt("fr-FR", "en")
    zh = build_analysis_system_prompt("fr-FR", "zh")
    assert "ENGLISH" in en
    assert "简体中文" in zh
    assert en != zh


def test_unknown_target_language_falls_back_to_code():
    assert target_language_name("ja-JP") == "ja-JP"
    assert target_language_name("fr-FR") == "French (Français)"


def test_user_prompt_embeds_glossary_verbatim():
    glossary = "[ID:TERM-001] Save = Speichern [source: g_de.txt]"
    prompt = build_analysis_user_prompt("de-DE", glossary)
    assert glossary in prompt
    assert f"Total Chars: {len(glossary)}" in prompt
    assert "NEVER leave 'suggestionsTarget' empty" in prompt


def test_user_prompt_without_glossary():
    prompt = build_analysis_user_prompt("de-DE", None)
    assert "No specific glossary provided." in prompt


def test_verification_prompts_carry_issues_and_skills():
    issue = Issue.model_validate(issue_payload(category="Terminology", glossaryTermId="TERM-001"))

    system = build_verification_system_prompt("SKILL BLOCK")
    user = build_verification_user_prompt([issue], "de-DE", None)

    assert "SKILL BLOCK" in system
    assert "hallucination" in system
    assert "Glossary Context: None" in user
    assert "Target Language: de-DE" in user

    issues_json = user.split("Initial Issues List (JSON):")[1].split("Target Language:")[0]
    parsed = json.loads(issues_json)
    assert parsed[0]["issueCategory"] == "Terminology"
    assert parsed[0]["glossaryTermId"] == "TERM-001"
