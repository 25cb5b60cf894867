import logging
import os
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence

from lqa.core.config import settings
from lqa.core.errors import ConfigurationError
from lqa.llm.fake_client import FakeLLMClient
from lqa.llm.llm_client import LLMClient
from lqa.llm.openai_client import OpenAIClient
from lqa.models.pydantic import AnalysisRequest, BulkItemResult, Report
from lqa.services.agents.analysis.analysis_invoker import AnalysisInvoker
from lqa.services.agents.reconciliation.report_reconciler import ReportReconciler
from lqa.services.agents.verification.verifier_agent import VerifierAgent
from lqa.services.images import ImageLoader
from lqa.services.prompts import build_analysis_system_prompt, build_analysis_user_prompt
from lqa.services.skills import format_skills_for_prompt, retrieve_skills

logger = logging.getLogger(__name__)

TEST_MODE = os.getenv("TEST_MODE") == "1"


class LqaPipeline:
    """
    Skills -> Prompts -> Analyse -> Verifier -> Reconciler.

    Hält keinen veränderlichen Zustand zwischen Requests; eine Instanz kann
    von mehreren Threads gleichzeitig benutzt werden.
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        image_loader: Optional[ImageLoader] = None,
        max_scene_skills: Optional[int] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        # LLM-Client einmal zentral instanziieren
        if llm_client is None:
            llm_client = FakeLLMClient() if TEST_MODE else OpenAIClient()
        self.llm_client = llm_client

        self.analysis_invoker = AnalysisInvoker(llm_client, image_loader=image_loader, sleep=sleep)
        self.verifier_agent = VerifierAgent(llm_client, sleep=sleep)
        self.reconciler = ReportReconciler()
        self.max_scene_skills = max_scene_skills if max_scene_skills is not None else settings.max_scene_skills

    def run(self, request: AnalysisRequest) -> Report:
        # 1. Skills für Szene + Zielsprache
        skills = retrieve_skills(request.scene_hint, request.target_language)
        skills_block = format_skills_for_prompt(skills, self.max_scene_skills)

        # 2. Prompts
        system_prompt = build_analysis_system_prompt(
            request.target_language,
            request.report_language,
            skills_block,
        )
        user_prompt = build_analysis_user_prompt(request.target_language, request.glossary_text)

        # 3. Analyse (Retry + Fallback), Fehler hier gehen an den Aufrufer
        outcome = self.analysis_invoker.analyze(request, system_prompt, user_prompt)

        # 4. Verifier (no-op bei Fehlern)
        report = self.verifier_agent.verify(
            outcome.report,
            outcome.images,
            skills_block,
            request.target_language,
            request.glossary_text,
        )

        # 5. Sanitizer, Score-Konsistenz, Quality-Level
        report = self.reconciler.reconcile(report, request.glossary_text)

        logger.info(
            "LQA for %s finished: %s, %d issues (model=%s, verified=%s)",
            request.request_id,
            report.overall.quality_level,
            len(report.issues),
            report.model,
            report.verified,
        )
        return report

    def run_bulk(
        self,
        requests: Sequence[AnalysisRequest],
        max_concurrency: Optional[int] = None,
    ) -> List[BulkItemResult]:
        """
        Führt mehrere Requests parallel aus (max. bulk_max_concurrency).
        Ergebnisse in Eingabe-Reihenfolge; einzelne Fehler landen im Item.
        ConfigurationError bricht den ganzen Lauf ab.
        """
        if not requests:
            return []

        workers = max_concurrency or settings.bulk_max_concurrency
        results: List[BulkItemResult] = []

        with ThreadPoolExecutor(max_workers=max(1, min(workers, len(requests)))) as pool:
            futures = [pool.submit(self.run, request) for request in requests]
            for request, future in zip(requests, futures):
                try:
                    report = future.result()
                except ConfigurationError:
                    raise
                except Exception as e:
                    logger.warning("Bulk item %s failed: %s", request.request_id, e)
                    results.append(BulkItemResult(request_id=request.request_id, error=str(e)))
                else:
                    results.append(BulkItemResult(request_id=request.request_id, report=report))

        return results
