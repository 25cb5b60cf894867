"""Prompt-Templates für den Verifier (Peer-Review der gefundenen Issues)."""

import json
from typing import List, Optional

from lqa.models.pydantic import Issue


def build_verification_system_prompt(skills_block: str) -> str:
    """Peer-Review-Rolle plus derselbe Skill-Block wie bei der Analyse."""
    return f"""
Role: You are a Senior LQA Specialist conducting a peer review.
Context: You have access to the specific 'LQA Skills' used to generate the initial report.

Task: Verify the reported issues against the Screenshots and the Skills.

Rules:
1. Layout Issues:
   - OVERLAP/TRUNCATION: Must be marked isValid: true.
   - SPACING/ALIGNMENT: If the issue violates a specific LQA Skill (e.g., "nav_truncation_priority"), mark isValid: true.
   - IF MERELY COMPACT: Do NOT reject. Instead, mark isValid: true but suggest refining severity to 'Minor'.

2. Terminology/Translation:
   - GLOSSARY: Strict adherence. If it contradicts glossary, isValid: true.
   - STYLE: If the translation sounds robotic or violates 'politeness_register' skill, isValid: true.

3. Hallucination Check:
   - Only mark isValid: false if the issue describes something visible that clearly DOES NOT EXIST in the image (e.g., complaining about a button that isn't there).
   - When rejecting for that reason, say "hallucination", "not visible" or "does not exist" in the reason.

Return one verdict per issue id. Use refinedSeverity (Critical, Major, Minor) and refinedRationale only when they improve the issue.

LQA SKILLS REFERENCE:
{skills_block}
"""


def build_verification_user_prompt(
    issues: List[Issue],
    target_language: str,
    glossary_text: Optional[str] = None,
) -> str:
    issues_json = json.dumps(
        [issue.model_dump(by_alias=True, exclude_none=True) for issue in issues],
        indent=2,
        ensure_ascii=False,
    )
    return f"""
Initial Issues List (JSON):
{issues_json}

Target Language: {target_language}
Glossary Context: {glossary_text or 'None'}

Please verify each issue and return the verdict.
"""
