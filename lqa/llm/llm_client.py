from abc import ABC, abstractmethod
from typing import Any

class LLMClient(ABC):
    @abstractmethod
    def complete(self, prompt: str, **kwargs: Any) -> str:
        """
        Sendet Prompt an ein LLM und gibt nur den Text-Output zurück.

        Übliche kwargs: model, system_prompt, images (Liste ProcessedImage),
        response_schema (JSON-Schema-Dict), temperature.
        """
        raise NotImplementedError

    def ensure_configured(self) -> None:
        """
        Pre-Flight-Check ohne Netzwerk. Wirft ConfigurationError, wenn der
        Client nicht benutzbar ist (z.B. fehlender API-Key).
        """
