"""
Skill-Retrieval für die LQA-Analyse.

- retrieve_skills: allgemeine Skills (sprachgefiltert) + Skills der erkannten Szene
- format_skills_for_prompt: kompakter, deterministischer Prompt-Block

Der formatierte Block wird sowohl in den Analyse- als auch in den
Verifier-Prompt eingesetzt. Er muss daher bei gleichen Eingaben exakt
gleich sein.
"""

import logging
from typing import List

from lqa.services.skills.scene_classifier import detect_scene_type
from lqa.services.skills.skill_bank import GENERAL_SKILLS, SCENE_SKILLS
from lqa.services.skills.skill_models import RetrievedSkillSet, Skill

logger = logging.getLogger(__name__)

MAX_EXAMPLES_PER_SKILL = 2


def retrieve_skills(scene_hint: str, target_language: str) -> RetrievedSkillSet:
    general = tuple(s for s in GENERAL_SKILLS if s.is_applicable(target_language))
    scene_type = detect_scene_type(scene_hint)
    scene_skills = SCENE_SKILLS.get(scene_type, ())

    logger.info(
        "[SkillBank] Scene: %s | General: %d | Scene-specific: %d",
        scene_type.value,
        len(general),
        len(scene_skills),
    )
    return RetrievedSkillSet(
        general_skills=general,
        scene_skills=tuple(scene_skills),
        scene_type=scene_type,
    )


def _format_skill(skill: Skill) -> List[str]:
    lines = [f"  • [{skill.name}]: {skill.principle}"]
    if skill.examples:
        lines.append(f"    Examples: {' | '.join(skill.examples[:MAX_EXAMPLES_PER_SKILL])}")
    return lines


def format_skills_for_prompt(skills: RetrievedSkillSet, max_scene_skills: int = 5) -> str:
    """
    Rendert alle allgemeinen Skills und bis zu max_scene_skills Szenen-Skills
    (in Registrierungsreihenfolge), jeweils mit max. 2 Beispielen.
    """
    lines: List[str] = [
        "=== RETRIEVED LQA SKILLS (Apply these during analysis) ===",
        "",
        "## General Principles:",
    ]
    for skill in skills.general_skills:
        lines.extend(_format_skill(skill))

    if skills.scene_skills:
        lines.append("")
        lines.append(f"## Scene-Specific Skills (detected: {skills.scene_type.value}):")
        for skill in skills.scene_skills[:max_scene_skills]:
            lines.extend(_format_skill(skill))

    lines.append("")
    lines.append("=== END SKILLS ===")
    return "\n".join(lines)
