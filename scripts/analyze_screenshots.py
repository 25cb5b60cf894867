"""
Führt die LQA-Pipeline direkt (ohne Server) auf Screenshot-Paaren aus.

Einzelnes Paar:
    python scripts/analyze_screenshots.py --source en.png --target de.png \
        --target-language de-DE --scene-hint "settings page with toggles"

Bulk (Dateien mit gleichem Namen werden gepaart):
    python scripts/analyze_screenshots.py --source-dir shots/en --target-dir shots/de \
        --glossary glossary_de.txt --out results/lqa

Output:
- ein Report pro Paar als JSON (camelCase wie die HTTP-API)
- Kurzfassung auf stdout
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Add project root to path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

load_dotenv()

from lqa.core.errors import LqaError
from lqa.models.pydantic import AnalysisRequest, Report
from lqa.pipeline.lqa_pipeline import LqaPipeline
from lqa.services.glossary import compile_glossary

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".webp", ".heic", ".heif"}


def load_glossary(paths: List[str]) -> str | None:
    """Liest Terminologie-Dateien ("Source = Target" pro Zeile) und kompiliert sie."""
    if not paths:
        return None
    files = []
    for p in paths:
        path = Path(p)
        files.append((path.name, path.read_text(encoding="utf-8").splitlines()))
    compiled = compile_glossary(files)
    print(f"Glossar: {compiled.term_count} Terme (Sprache: {compiled.detected_language or 'unbekannt'})")
    return compiled.text


def pair_directories(source_dir: Path, target_dir: Path) -> List[tuple[Path, Path]]:
    pairs = []
    for source in sorted(source_dir.iterdir()):
        if source.suffix.lower() not in IMAGE_SUFFIXES:
            continue
        target = target_dir / source.name
        if target.exists():
            pairs.append((source, target))
        else:
            print(f"⚠️  Kein Target-Screenshot für {source.name}, übersprungen")
    return pairs


def print_report(report: Report) -> None:
    print("=" * 70)
    print(f"{report.request_id}: {report.overall.quality_level} (model={report.model}, verified={report.verified})")
    print("=" * 70)
    for issue in report.issues:
        print(f"  [{issue.severity}] {issue.category} @ {issue.location}")
        print(f"    {issue.description[:100]}")
        print(f"    -> {issue.suggestions[0]}")
    if not report.issues:
        print("  Keine Issues gefunden")
    print()


def write_report(out_dir: Path, report: Report) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{report.request_id}.json"
    path.write_text(
        json.dumps(report.model_dump(by_alias=True), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


def main() -> int:
    ap = argparse.ArgumentParser(description="Vision LQA für Screenshot-Paare")
    ap.add_argument("--source", type=str, help="Source-Screenshot (Pfad, URL oder data:-URL)")
    ap.add_argument("--target", type=str, help="Target-Screenshot (Pfad, URL oder data:-URL)")
    ap.add_argument("--source-dir", type=str, help="Ordner mit Source-Screenshots (Bulk)")
    ap.add_argument("--target-dir", type=str, help="Ordner mit Target-Screenshots (Bulk)")
    ap.add_argument("--target-language", type=str, default="de-DE", help="Zielsprache (default: de-DE)")
    ap.add_argument("--report-language", choices=["en", "zh"], default="en", help="Sprache des Reports")
    ap.add_argument("--scene-hint", type=str, default="", help="Kurze Beschreibung der UI-Szene")
    ap.add_argument("--glossary", action="append", default=[], help="Terminologie-Datei (mehrfach möglich)")
    ap.add_argument("--request-id", type=str, default="screenshot-1", help="ID für das einzelne Paar")
    ap.add_argument("--out", type=str, help="Ordner für JSON-Reports")
    ap.add_argument("--concurrency", type=int, help="Max. parallele Pipelines im Bulk-Run")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    glossary_text = load_glossary(args.glossary)
    pipeline = LqaPipeline()
    out_dir = Path(args.out) if args.out else None

    if args.source_dir and args.target_dir:
        pairs = pair_directories(Path(args.source_dir), Path(args.target_dir))
        if not pairs:
            print("❌ Keine passenden Screenshot-Paare gefunden")
            return 1

        bulk_requests = [
            AnalysisRequest(
                source_image=str(source),
                target_image=str(target),
                target_language=args.target_language,
                report_language=args.report_language,
                glossary_text=glossary_text,
                scene_hint=args.scene_hint,
                request_id=source.stem,
            )
            for source, target in pairs
        ]
        results = pipeline.run_bulk(bulk_requests, max_concurrency=args.concurrency)
        failed = 0
        for item in results:
            if item.report is None:
                failed += 1
                print(f"❌ {item.request_id}: {item.error}")
                continue
            print_report(item.report)
            if out_dir:
                write_report(out_dir, item.report)
        print(f"✅ {len(results) - failed}/{len(results)} Paare analysiert")
        return 1 if failed else 0

    if not (args.source and args.target):
        ap.error("entweder --source/--target oder --source-dir/--target-dir angeben")

    request = AnalysisRequest(
        source_image=args.source,
        target_image=args.target,
        target_language=args.target_language,
        report_language=args.report_language,
        glossary_text=glossary_text,
        scene_hint=args.scene_hint,
        request_id=args.request_id,
    )
    try:
        report = pipeline.run(request)
    except LqaError as e:
        print(f"❌ Fehler: {e}")
        return 1

    print_report(report)
    if out_dir:
        write_report(out_dir, report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
