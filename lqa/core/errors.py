"""
Fehlertaxonomie der LQA-Pipeline.

- ConfigurationError: fehlende Credentials o.ä., fatal, wird nie wiederholt
- ImageLoadError: Bild konnte nicht geladen werden (Transport-Fehler)
- GenerationError: leere/kaputte Modellantwort (Protokoll-Fehler)
- RetryExhaustedError: alle Modelle und Retries verbraucht

Alles andere (unbekannter MIME-Type, Verifier-Ausfall, ungültige Term-ID)
wird lokal behandelt und taucht hier nicht auf.
"""


class LqaError(Exception):
    """Basisklasse für alle Pipeline-Fehler."""


class ConfigurationError(LqaError):
    pass


class ImageLoadError(LqaError):
    pass


class GenerationError(LqaError):
    pass


class RetryExhaustedError(LqaError):
    def __init__(self, message: str, attempts: list[str] | None = None):
        super().__init__(message)
        # Modell-IDs in Aufrufreihenfolge, ein Eintrag pro Versuch
        self.attempts = attempts or []
