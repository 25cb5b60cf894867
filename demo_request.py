#!/usr/bin/env python3
"""Demo-Request gegen den laufenden LQA-Server"""

import json
import sys

import requests

BASE_URL = "http://localhost:8000"

payload = {
    "source_image": "https://example.com/screenshots/settings_en.png",
    "target_image": "https://example.com/screenshots/settings_de.png",
    "target_language": "de-DE",
    "report_language": "en",
    "scene_hint": "settings page with toggle switches",
    "glossary_text": "[ID:TERM-001] Save = Speichern [source: glossary_de.txt]",
    "request_id": "demo-settings-01",
}

if len(sys.argv) == 3:
    payload["source_image"], payload["target_image"] = sys.argv[1], sys.argv[2]

print("=" * 70)
print("INPUT:")
print("=" * 70)
print(json.dumps(payload, indent=2, ensure_ascii=False))
print()

try:
    response = requests.post(f"{BASE_URL}/analyze", json=payload, timeout=300)
    response.raise_for_status()
    report = response.json()["report"]
except requests.exceptions.ConnectionError:
    print(f"❌ Server nicht erreichbar unter {BASE_URL}")
    print("   Bitte starten Sie den Server mit: uvicorn lqa.server:app")
    sys.exit(1)
except Exception as e:
    print(f"❌ Fehler: {e}")
    sys.exit(1)

print("=" * 70)
print("OUTPUT: QUALITY + SCORES")
print("=" * 70)
print(f"  Quality Level: {report['overall']['qualityLevel']}")
for name, value in report["overall"]["scores"].items():
    print(f"  {name:<18} {value:.1f}")
print(f"  Modell: {report.get('model')} (verifiziert: {report.get('verified')})")
print()

print("=" * 70)
print("OUTPUT: ISSUES")
print("=" * 70)
if report["issues"]:
    for issue in report["issues"]:
        print(f"  {issue['id']} [{issue['severity']}] {issue['issueCategory']}")
        print(f"    Ort: {issue['location']}")
        print(f"    {issue['description'][:80]}")
        print(f"    Vorschlag: {issue['suggestionsTarget'][0]}")
        print()
else:
    print("  Keine Issues gefunden")
print()

print("=" * 70)
print("✅ Demo abgeschlossen")
print("=" * 70)
