from dotenv import load_dotenv
import logging
import os

load_dotenv()
from contextlib import asynccontextmanager

from fastapi import FastAPI

from lqa.api.routes import router as api_router
from lqa.core.config import settings

logger = logging.getLogger(__name__)


def validate_startup_config():
    """Validiert kritische Umgebungsvariablen beim Startup (fail-fast)."""
    errors = []

    # Im TEST_MODE läuft alles über den FakeLLMClient
    if os.getenv("TEST_MODE") == "1":
        return

    if not (settings.openai_api_key or os.getenv("OPENAI_API_KEY")):
        errors.append(
            "OPENAI_API_KEY is not set. "
            "Set it in .env file or as environment variable. "
            "Required for LQA analysis."
        )

    if not settings.llm_model or not settings.llm_fallback_model:
        errors.append("LLM_MODEL and LLM_FALLBACK_MODEL must both be set.")

    if errors:
        error_msg = "Startup validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Validierung beim Startup
    validate_startup_config()
    logger.info(
        "%s started (models: %s -> %s)",
        settings.app_name,
        settings.llm_model,
        settings.llm_fallback_model,
    )
    yield


app = FastAPI(title="VisionLQA API", lifespan=lifespan)
app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Vision LQA API running"}
