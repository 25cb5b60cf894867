from typing import List

from lqa.models.pydantic import (
    AnalysisRequest,
    BulkAnalyzeResponse,
    CompiledGlossary,
    GlossaryFile,
    Report,
)
from lqa.pipeline.lqa_pipeline import LqaPipeline
from lqa.services.glossary import compile_glossary


class LqaService:
    """Dünne Schicht zwischen HTTP-Routen und Pipeline."""

    def __init__(self) -> None:
        self.pipeline = LqaPipeline()

    def analyze(self, req: AnalysisRequest) -> Report:
        return self.pipeline.run(req)

    def analyze_bulk(self, reqs: List[AnalysisRequest]) -> BulkAnalyzeResponse:
        results = self.pipeline.run_bulk(reqs)
        failed = sum(1 for r in results if r.error is not None)
        return BulkAnalyzeResponse(
            results=results,
            succeeded=len(results) - failed,
            failed=failed,
        )

    def compile_glossary(self, files: List[GlossaryFile]) -> CompiledGlossary:
        # Reihenfolge der Dateien bestimmt die ID-Vergabe
        return compile_glossary([(f.name, f.terms) for f in files])
