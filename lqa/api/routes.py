from fastapi import APIRouter, HTTPException

from lqa.core.errors import ConfigurationError, RetryExhaustedError
from lqa.models.pydantic import (
    AnalysisRequest,
    AnalyzeResponse,
    BulkAnalyzeRequest,
    BulkAnalyzeResponse,
    CompiledGlossary,
    CompileGlossaryRequest,
)
from lqa.services.lqa_service import LqaService
from lqa.services.skills import format_skills_for_prompt, retrieve_skills

router = APIRouter()
lqa_service = LqaService()


# einfacher Health-Check
@router.get("/health")
async def health():
    return {"status": "ok"}


# analysiert ein Screenshot-Paar und liefert den finalen Report
@router.post("/analyze", response_model=AnalyzeResponse)
def analyze(req: AnalysisRequest):
    try:
        report = lqa_service.analyze(req)
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    except RetryExhaustedError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return AnalyzeResponse(report=report)


# mehrere Paare parallel, Fehler pro Item im Ergebnis
@router.post("/analyze/bulk", response_model=BulkAnalyzeResponse)
def analyze_bulk(req: BulkAnalyzeRequest):
    try:
        return lqa_service.analyze_bulk(req.requests)
    except ConfigurationError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")


@router.post("/glossary/compile", response_model=CompiledGlossary)
def compile_glossary(req: CompileGlossaryRequest):
    return lqa_service.compile_glossary(req.files)


# Vorschau des Skill-Blocks, der in die Prompts eingesetzt wird
@router.get("/skills")
def skills(scene_hint: str = "", target_language: str = "de-DE"):
    retrieved = retrieve_skills(scene_hint, target_language)
    return {
        "scene_type": retrieved.scene_type.value,
        "general_skills": [s.name for s in retrieved.general_skills],
        "scene_skills": [s.name for s in retrieved.scene_skills],
        "prompt_block": format_skills_for_prompt(retrieved),
    }
