"""
VerifierAgent: Peer-Review der gefundenen Issues (Self-Correction-Loop).

Ein zweiter, schema-gebundener Call bekommt die Issue-Liste, denselben
Skill-Block und das Glossar und liefert ein Urteil pro Issue-ID.

Merge-Regeln:
- kein Urteil            -> Issue bleibt unverändert
- isValid = true         -> bleibt, refinedSeverity/refinedRationale überschreiben
- isValid = false        -> wird entfernt, außer Style/Formatting ohne
                            Halluzinations-Begründung: dann Minor + Review-Marker

Jeder Fehler beim Verifier lässt den Report unverändert, außer
ConfigurationError (fatal, geht an den Aufrufer).
"""

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from lqa.core.config import settings
from lqa.core.errors import ConfigurationError
from lqa.llm.llm_client import LLMClient
from lqa.llm.schemas import VERIFICATION_RESPONSE_SCHEMA
from lqa.models.pydantic import Issue, Report, VerificationResult, VerificationVerdict
from lqa.services.images import ImagePair
from lqa.services.parsing import parse_model_output
from lqa.services.prompts import build_verification_system_prompt, build_verification_user_prompt
from lqa.services.retry import build_plan, run_with_fallback

logger = logging.getLogger(__name__)

HALLUCINATION_MARKERS = ("hallucination", "not visible", "does not exist")
RESCUABLE_CATEGORIES = frozenset({"Style", "Formatting"})
REVIEW_MARKER = "[Review: Minor]"


def is_hallucination_reason(reason: str) -> bool:
    lower = (reason or "").lower()
    return any(marker in lower for marker in HALLUCINATION_MARKERS)


def _is_rescuable(issue: Issue, verdict: VerificationVerdict) -> bool:
    return issue.category in RESCUABLE_CATEGORIES and not is_hallucination_reason(verdict.reason)


def merge_verdicts(report: Report, verdicts: Iterable[VerificationVerdict]) -> Report:
    """Wendet die Urteile in-place auf report.issues an (Reihenfolge bleibt)."""
    by_id: Dict[str, VerificationVerdict] = {v.issue_id: v for v in verdicts}
    kept: List[Issue] = []

    for issue in report.issues:
        verdict = by_id.get(issue.id)
        if verdict is None:
            kept.append(issue)
            continue

        if verdict.is_valid:
            if verdict.refined_severity:
                issue.severity = verdict.refined_severity
            if verdict.refined_rationale:
                issue.rationale = verdict.refined_rationale
            kept.append(issue)
        elif _is_rescuable(issue, verdict):
            logger.info("Verifier rescued %s issue %s as Minor: %s", issue.category, issue.id, verdict.reason)
            issue.severity = "Minor"
            issue.description = f"{REVIEW_MARKER} {issue.description}"
            kept.append(issue)
        else:
            logger.info("Verifier removed issue %s (%s): %s", issue.id, issue.category, verdict.reason)

    report.issues = kept
    return report


class VerifierAgent:
    def __init__(
        self,
        llm_client: LLMClient,
        models: Optional[Sequence[str]] = None,
        retries: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
        temperature: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.llm = llm_client
        self.plan = build_plan(
            models or (settings.llm_model, settings.llm_fallback_model),
            settings.verifier_retries if retries is None else retries,
        )
        self.base_delay_ms = settings.retry_base_delay_ms if base_delay_ms is None else base_delay_ms
        self.temperature = settings.verifier_temperature if temperature is None else temperature
        self.sleep = sleep

    def verify(
        self,
        report: Report,
        images: ImagePair,
        skills_block: str,
        target_language: str,
        glossary_text: Optional[str] = None,
    ) -> Report:
        if not report.issues:
            return report

        system_prompt = build_verification_system_prompt(skills_block)
        user_prompt = build_verification_user_prompt(report.issues, target_language, glossary_text)

        def attempt(model: str) -> VerificationResult:
            raw = self.llm.complete(
                user_prompt,
                model=model,
                system_prompt=system_prompt,
                images=list(images),
                response_schema=VERIFICATION_RESPONSE_SCHEMA,
                temperature=self.temperature,
            )
            return parse_model_output(raw, VerificationResult)

        try:
            result, model = run_with_fallback(
                self.plan,
                attempt,
                base_delay_ms=self.base_delay_ms,
                sleep=self.sleep,
                label="Verifier",
            )
        except ConfigurationError:
            raise
        except Exception as e:
            # Verifikation darf den Report nie verschlechtern
            logger.warning("Verification failed, keeping original report: %s", e)
            return report

        before = len(report.issues)
        merge_verdicts(report, result.verified_issues)
        report.verified = True
        logger.info(
            "Verification with %s: %d -> %d issues",
            model,
            before,
            len(report.issues),
        )
        return report
