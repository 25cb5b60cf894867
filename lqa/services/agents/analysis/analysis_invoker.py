"""
AnalysisInvoker: ein multimodaler Call (Source-Bild, Target-Bild, Prompts)
mit Retry/Fallback, Ergebnis ist ein schema-konformer Report.

Bildladen, Backend-Call und Parsing bilden zusammen einen Versuch. Ein
leerer Body oder ungültiges JSON wird also genauso wiederholt wie ein
Netzwerkfehler.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from lqa.core.config import settings
from lqa.llm.llm_client import LLMClient
from lqa.llm.schemas import REPORT_RESPONSE_SCHEMA
from lqa.models.pydantic import AnalysisRequest, Report
from lqa.services.images import ImageLoader, ImagePair
from lqa.services.parsing import parse_model_output
from lqa.services.retry import build_plan, run_with_fallback

logger = logging.getLogger(__name__)


@dataclass
class AnalysisOutcome:
    report: Report
    # werden vom Verifier wiederverwendet (kein zweiter Download)
    images: ImagePair


class AnalysisInvoker:
    def __init__(
        self,
        llm_client: LLMClient,
        image_loader: Optional[ImageLoader] = None,
        models: Optional[Sequence[str]] = None,
        retries: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
        temperature: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.llm = llm_client
        self.image_loader = image_loader or ImageLoader()
        self.plan = build_plan(
            models or (settings.llm_model, settings.llm_fallback_model),
            settings.analysis_retries if retries is None else retries,
        )
        self.base_delay_ms = settings.retry_base_delay_ms if base_delay_ms is None else base_delay_ms
        self.temperature = settings.llm_temperature if temperature is None else temperature
        self.sleep = sleep

    def analyze(self, request: AnalysisRequest, system_prompt: str, user_prompt: str) -> AnalysisOutcome:
        """
        Raises:
            RetryExhaustedError: alle Versuche auf allen Modellen gescheitert
            ConfigurationError: fehlende Credentials (vor jedem Netzwerkzugriff)
        """
        self.llm.ensure_configured()

        loaded: list[ImagePair] = []

        def attempt(model: str) -> AnalysisOutcome:
            # Einmal erfolgreich geladene Bilder werden für weitere Versuche behalten
            if not loaded:
                loaded.append(self.image_loader.load_pair(request.source_image, request.target_image))
            images = loaded[0]

            raw = self.llm.complete(
                user_prompt,
                model=model,
                system_prompt=system_prompt,
                images=list(images),
                response_schema=REPORT_RESPONSE_SCHEMA,
                temperature=self.temperature,
            )
            return AnalysisOutcome(report=parse_model_output(raw, Report), images=images)

        outcome, model = run_with_fallback(
            self.plan,
            attempt,
            base_delay_ms=self.base_delay_ms,
            sleep=self.sleep,
            label="Analysis",
        )

        # Die ID des Aufrufers gewinnt immer gegen das, was das Modell zurückgibt
        outcome.report.request_id = request.request_id
        outcome.report.model = model
        logger.info(
            "Analysis for %s done with %s: %d issues",
            request.request_id,
            model,
            len(outcome.report.issues),
        )
        return outcome
