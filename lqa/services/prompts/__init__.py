"""
Prompt-Templates für Analyse und Verifikation.

Alle Builder sind reine Funktionen; Prompt-Drift zwischen zwei Calls
kommt damit ausschließlich vom Modell.
"""

from lqa.services.prompts.analysis_prompts import (
    build_analysis_system_prompt,
    build_analysis_user_prompt,
)
from lqa.services.prompts.verification_prompts import (
    build_verification_system_prompt,
    build_verification_user_prompt,
)

__all__ = [
    "build_analysis_system_prompt",
    "build_analysis_user_prompt",
    "build_verification_system_prompt",
    "build_verification_user_prompt",
]
