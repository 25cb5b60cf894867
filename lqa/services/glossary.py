"""
Glossar-Kompilierung und Term-ID-Erkennung.

Jede gültige Zeile ("Source = Target") bekommt eine globale ID und einen
Herkunftsvermerk:

    [ID:TERM-001] Save = Speichern [source: glossary_de.txt]

Diese IDs sind die einzige Grundlage, auf der der Reconciler
Terminology-Issues akzeptiert.
"""

import logging
import re
from typing import Dict, Optional, Sequence, Set, Tuple

from lqa.models.pydantic import CompiledGlossary

logger = logging.getLogger(__name__)

TERM_TAG_PATTERN = re.compile(r"\[ID:(TERM-\d+)\]")

_LANGUAGE_HINTS = (
    ("de-DE", ("de", "ger", "deutsch")),
    ("fr-FR", ("fr", "fre", "french")),
)


def format_term_id(number: int) -> str:
    return f"TERM-{number:03d}"


def extract_term_ids(glossary_text: Optional[str]) -> Set[str]:
    """Alle wohlgeformten Tags im Glossar, ohne Klammern (z.B. {"TERM-001"})."""
    if not glossary_text:
        return set()
    return set(TERM_TAG_PATTERN.findall(glossary_text))


def detect_glossary_language(filename: str) -> Optional[str]:
    lower = filename.lower()
    for language, hints in _LANGUAGE_HINTS:
        if any(hint in lower for hint in hints):
            return language
    return None


def compile_glossary(files: Sequence[Tuple[str, Sequence[str]]]) -> CompiledGlossary:
    """
    Führt mehrere Terminologie-Dateien zu einem Glossar-Text zusammen.
    files ist eine geordnete Folge von (Dateiname, Zeilen); gleiche Dateinamen
    dürfen mehrfach vorkommen und werden alle verarbeitet.

    - Zeilen ohne "=" werden übersprungen
    - Der Zähler läuft global über alle Dateien
    - Doppelte Source-Begriffe (case-insensitive): der spätere Eintrag gewinnt,
      bleibt aber an der Position des ersten
    - Sprache nur, wenn alle erkannten Dateien dieselbe Sprache haben
    """
    entries: Dict[str, str] = {}
    languages: Set[str] = set()
    counter = 1

    for filename, lines in files:
        detected = detect_glossary_language(filename)
        if detected:
            languages.add(detected)

        for line in lines:
            source, sep, _ = line.partition("=")
            if not sep:
                continue
            term_id = format_term_id(counter)
            counter += 1
            entries[source.strip().lower()] = f"[ID:{term_id}] {line.strip()} [source: {filename}]"

    detected_language = next(iter(languages)) if len(languages) == 1 else None
    logger.info(
        "Compiled glossary: %d unique terms from %d files (language=%s)",
        len(entries),
        len(files),
        detected_language,
    )
    return CompiledGlossary(
        text="\n".join(entries.values()),
        term_count=len(entries),
        detected_language=detected_language,
    )
