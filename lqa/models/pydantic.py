from typing import Any, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator


IssueCategory = Literal[
    "Layout",
    "Mistranslation",
    "Terminology",
    "Formatting",
    "Grammar",
    "Style",
    "Other",
]
Severity = Literal["Critical", "Major", "Minor"]
# Reihenfolge = schlechteste zuerst
QualityLevel = Literal["Critical", "Poor", "Average", "Good", "Perfect"]
ReportLanguage = Literal["en", "zh"]

ISSUE_CATEGORIES: tuple[str, ...] = get_args(IssueCategory)
SEVERITIES: tuple[str, ...] = get_args(Severity)
QUALITY_LEVELS: tuple[str, ...] = get_args(QualityLevel)

SCORE_MIN = 0.0
SCORE_MAX = 5.0


def _canonical(value: Any, allowed: tuple[str, ...]) -> Any:
    """Case-insensitive Abgleich gegen eine geschlossene Werteliste."""
    if isinstance(value, str):
        wanted = value.strip().lower()
        for option in allowed:
            if option.lower() == wanted:
                return option
    return value


class _WireModel(BaseModel):
    """
    Basis für alle Modelle, die über das Backend-Schema bzw. HTTP laufen.
    Python-Felder in snake_case, auf dem Draht camelCase (Alias).
    """
    model_config = ConfigDict(populate_by_name=True)


class Issue(_WireModel):
    """
    Ein einzelnes LQA-Problem.
    Darf nur innerhalb der Pipeline verändert werden (Verifier, Sanitizer).
    """
    id: str
    location: str
    category: IssueCategory = Field(alias="issueCategory")
    severity: Severity
    source_text: Optional[str] = Field(default=None, alias="sourceText")
    target_text: Optional[str] = Field(default=None, alias="targetText")
    description: str
    rationale: str = Field(alias="suggestionRationale")
    # Invariante: nie leer, wenn der Report die Pipeline verlässt
    suggestions: List[str] = Field(alias="suggestionsTarget")
    glossary_source: Optional[str] = Field(default=None, alias="glossarySource")
    glossary_term_id: Optional[str] = Field(default=None, alias="glossaryTermId")

    @field_validator("category", mode="before")
    @classmethod
    def _normalize_category(cls, v: Any) -> Any:
        return _canonical(v, ISSUE_CATEGORIES)

    @field_validator("severity", mode="before")
    @classmethod
    def _normalize_severity(cls, v: Any) -> Any:
        return _canonical(v, SEVERITIES)

    @field_validator("suggestions")
    @classmethod
    def _suggestions_not_empty(cls, v: List[str]) -> List[str]:
        cleaned = [s.strip() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError("suggestionsTarget must contain at least one suggestion")
        return cleaned


class Scores(_WireModel):
    """Sechs Dimensionen, jeweils auf [0, 5] begrenzt."""
    accuracy: float
    terminology: float
    layout: float
    grammar: float
    formatting: float
    tone: float = Field(alias="localizationTone")

    @field_validator("*")
    @classmethod
    def _clamp(cls, v: float) -> float:
        if v < SCORE_MIN:
            return SCORE_MIN
        if v > SCORE_MAX:
            return SCORE_MAX
        return v


class Overall(_WireModel):
    # Vom Modell selbst vergeben, nur beratend: wird immer überschrieben
    quality_level: Optional[QualityLevel] = Field(default=None, alias="qualityLevel")
    scores: Scores
    scene_description: str = Field(alias="sceneDescription")
    problems_summary: str = Field(alias="mainProblemsSummary")

    @field_validator("quality_level", mode="before")
    @classmethod
    def _normalize_quality(cls, v: Any) -> Any:
        v = _canonical(v, QUALITY_LEVELS)
        return v if v in QUALITY_LEVELS else None


class Summary(_WireModel):
    severe_count: int = Field(alias="severeCount")
    major_count: int = Field(alias="majorCount")
    minor_count: int = Field(alias="minorCount")
    advice: str = Field(alias="optimizationAdvice")
    term_advice: Optional[str] = Field(default=None, alias="termAdvice")


class Report(_WireModel):
    """
    LQA-Report für ein Screenshot-Paar.
    Wird vom AnalysisInvoker erzeugt, von Verifier und Reconciler in-place
    angepasst und danach unverändert an den Aufrufer gegeben.
    """
    request_id: Optional[str] = Field(default=None, alias="screenshotId")
    overall: Overall
    issues: List[Issue] = Field(default_factory=list)
    summary: Summary
    # Nicht Teil des Backend-Schemas, nur für Nachvollziehbarkeit
    model: Optional[str] = None
    verified: bool = False

    @field_validator("issues", mode="before")
    @classmethod
    def _issues_default(cls, v: Any) -> Any:
        return [] if v is None else v


class VerificationVerdict(_WireModel):
    """Urteil des Verifiers zu genau einem Issue (über die ID zugeordnet)."""
    issue_id: str = Field(alias="id")
    is_valid: bool = Field(alias="isValid")
    reason: str
    refined_severity: Optional[Severity] = Field(default=None, alias="refinedSeverity")
    refined_rationale: Optional[str] = Field(default=None, alias="refinedRationale")

    @field_validator("refined_severity", mode="before")
    @classmethod
    def _normalize_refined_severity(cls, v: Any) -> Any:
        # Unbrauchbare optionale Verfeinerung verwerfen statt ganzes Urteil
        v = _canonical(v, SEVERITIES)
        return v if v in SEVERITIES else None

    @field_validator("refined_rationale", mode="before")
    @classmethod
    def _blank_rationale(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class VerificationResult(_WireModel):
    verified_issues: List[VerificationVerdict] = Field(alias="verifiedIssues")


class AnalysisRequest(BaseModel):
    """
    Request-Body für den /analyze-Endpoint bzw. Eingabe der Pipeline.
    Bildreferenzen: http(s)-URL, data:-URL oder lokaler Dateipfad.
    """
    source_image: str
    target_image: str
    target_language: str = "de-DE"
    report_language: ReportLanguage = "en"
    glossary_text: Optional[str] = None
    scene_hint: str = ""
    request_id: str


class AnalyzeResponse(BaseModel):
    report: Report


class BulkAnalyzeRequest(BaseModel):
    requests: List[AnalysisRequest]


class BulkItemResult(BaseModel):
    request_id: str
    report: Optional[Report] = None
    error: Optional[str] = None


class BulkAnalyzeResponse(BaseModel):
    results: List[BulkItemResult]
    succeeded: int
    failed: int


class GlossaryFile(BaseModel):
    """Bereits extrahierte Zeilen einer Terminologie-Datei ("Source = Target")."""
    name: str
    terms: List[str]


class CompileGlossaryRequest(BaseModel):
    files: List[GlossaryFile]


class CompiledGlossary(BaseModel):
    text: str
    term_count: int
    detected_language: Optional[str] = None
