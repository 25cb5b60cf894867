from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple


class SceneType(str, Enum):
    NAVIGATION = "navigation"
    FORM = "form"
    DASHBOARD = "dashboard"
    MODAL = "modal"
    TABLE = "table"
    SETTINGS = "settings"
    ERROR_PAGE = "error_page"
    GENERIC = "generic"


@dataclass(frozen=True)
class Skill:
    """
    Kompakte LQA-Heuristik, die in den Prompt injiziert wird.
    Wird einmal beim Import registriert und nie verändert.
    """
    name: str
    principle: str
    when_to_apply: str
    examples: Tuple[str, ...] = ()
    # None = sprachunabhängig; sonst Prädikat auf die Zielsprache
    applies_to: Optional[Callable[[str], bool]] = None

    def is_applicable(self, target_language: str) -> bool:
        return self.applies_to is None or self.applies_to(target_language)


@dataclass(frozen=True)
class RetrievedSkillSet:
    general_skills: Tuple[Skill, ...]
    scene_skills: Tuple[Skill, ...]
    scene_type: SceneType
