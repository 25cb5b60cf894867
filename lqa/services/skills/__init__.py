"""
LQA SkillBank: Szenenerkennung, statische Skill-Registry und Retrieval.
"""

from lqa.services.skills.scene_classifier import detect_scene_type
from lqa.services.skills.skill_models import RetrievedSkillSet, SceneType, Skill
from lqa.services.skills.skill_retriever import format_skills_for_prompt, retrieve_skills

__all__ = [
    "RetrievedSkillSet",
    "SceneType",
    "Skill",
    "detect_scene_type",
    "format_skills_for_prompt",
    "retrieve_skills",
]
