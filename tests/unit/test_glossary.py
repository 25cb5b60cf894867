"""
Tests für Glossar-Kompilierung und Term-ID-Erkennung.
"""

from lqa.services.glossary import compile_glossary, detect_glossary_language, extract_term_ids


def test_compile_mints_ids_and_source_tags():
    compiled = compile_glossary([
        ("glossary_de.txt", ["Save = Speichern", "header line without separator", "Cancel = Abbrechen"]),
    ])

    assert compiled.text.splitlines() == [
        "[ID:TERM-001] Save = Speichern [source: glossary_de.txt]",
        "[ID:TERM-002] Cancel = Abbrechen [source: glossary_de.txt]",
    ]
    assert compiled.term_count == 2
    assert compiled.detected_language == "de-DE"


def test_later_file_overrides_duplicate_source_term():
    compiled = compile_glossary([
        ("glossary_de.txt", ["Save = Speichern", "Cancel = Abbrechen"]),
        ("extra_de.txt", ["save = Sichern"]),
    ])

    lines = compiled.text.splitlines()
    assert compiled.term_count == 2
    # Position des ersten Eintrags, Text und ID des späteren
    assert lines[0] == "[ID:TERM-003] save = Sichern [source: extra_de.txt]"
    assert lines[1].startswith("[ID:TERM-002] Cancel")


def test_mixed_languages_report_none():
    compiled = compile_glossary([
        ("terms_de.txt", ["Save = Speichern"]),
        ("terms_fr.txt", ["Save = Enregistrer"]),
    ])
    assert compiled.detected_language is None


def test_empty_input():
    compiled = compile_glossary([])
    assert compiled.text == ""
    assert compiled.term_count == 0
    assert compiled.detected_language is None


def test_detect_glossary_language():
    assert detect_glossary_language("Glossary_GER.csv") == "de-DE"
    assert detect_glossary_language("french_terms.txt") == "fr-FR"
    assert detect_glossary_language("glossary.txt") is None


def test_extract_term_ids():
    text = "[ID:TERM-001] A = B [source: x]\n[ID:TERM-010] C = D\n[ID:TERM-x] broken"
    assert extract_term_ids(text) == {"TERM-001", "TERM-010"}
    assert extract_term_ids(None) == set()
    assert extract_term_ids("") == set()


def test_compiled_ids_are_extractable():
    compiled = compile_glossary([("g_fr.txt", ["Save = Enregistrer", "Open = Ouvrir"])])
    assert extract_term_ids(compiled.text) == {"TERM-001", "TERM-002"}


def test_files_with_same_name_are_all_compiled():
    # z.B. zwei Ordner mit je einer glossary_de.txt
    compiled = compile_glossary([
        ("glossary_de.txt", ["Save = Speichern"]),
        ("glossary_de.txt", ["Cancel = Abbrechen"]),
    ])

    assert compiled.term_count == 2
    assert compiled.text.splitlines() == [
        "[ID:TERM-001] Save = Speichern [source: glossary_de.txt]",
        "[ID:TERM-002] Cancel = Abbrechen [source: glossary_de.txt]",
    ]
