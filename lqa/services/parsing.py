"""
Parsing von Modellantworten.

- Markdown-Code-Fences entfernen (```json ... ```)
- Striktes JSON-Parsing (kein Regex-Fallback: das Backend läuft im JSON-Modus)
- Validierung gegen das erwartete Pydantic-Modell

Jeder Fehler wird als GenerationError gemeldet und zählt damit für die
Retry-/Fallback-Logik wie ein Transportfehler.
"""

import json
import re
from typing import Any, Type, TypeVar

from pydantic import BaseModel, ValidationError

from lqa.core.errors import GenerationError

M = TypeVar("M", bound=BaseModel)

_FENCE_OPEN = re.compile(r"```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"```\s*$")


def strip_code_fences(raw_text: str) -> str:
    cleaned = _FENCE_OPEN.sub("", raw_text, count=1) if raw_text.lstrip().startswith("```") else raw_text
    return _FENCE_CLOSE.sub("", cleaned).strip()


def parse_json_payload(raw_text: str | None) -> dict[str, Any]:
    """
    Parst den Text-Output des Modells zu einem Dict.

    Raises:
        GenerationError: leere Antwort, kein gültiges JSON oder kein JSON-Objekt
    """
    if not raw_text or not raw_text.strip():
        raise GenerationError("Received empty response from model.")

    cleaned = strip_code_fences(raw_text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise GenerationError(
            f"Invalid JSON response from model: {e.msg}. Preview: {cleaned[:200]}"
        ) from e

    if not isinstance(data, dict):
        raise GenerationError(f"Expected a JSON object, got {type(data).__name__}.")
    return data


def parse_model_output(raw_text: str | None, model_cls: Type[M]) -> M:
    """Parst und validiert; fehlende Pflichtfelder lassen den ganzen Versuch scheitern."""
    data = parse_json_payload(raw_text)
    try:
        return model_cls.model_validate(data)
    except ValidationError as e:
        raise GenerationError(
            f"Response does not match {model_cls.__name__} schema "
            f"({e.error_count()} errors): {e.errors()[0]['msg']}"
        ) from e
