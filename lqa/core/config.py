from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # .env wird automatisch gelesen
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "VisionLQA"
    environment: str = "dev"

    # Leer lassen = OPENAI_API_KEY aus der Umgebung (wird beim ersten Call geprüft)
    openai_api_key: str | None = None

    # Primär- und Fallback-Modell (beide müssen Bild-Input können)
    llm_model: str = "gpt-4o"
    llm_fallback_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 4096

    # Verifier nutzt dasselbe Modellpaar, aber ohne Multi-Retry
    verifier_temperature: float = 0.2
    verifier_retries: int = 0

    # Retry-Policy der Analyse: 2 zusätzliche Versuche, 1000ms -> 2000ms
    analysis_retries: int = 2
    retry_base_delay_ms: int = 1000

    max_scene_skills: int = 5
    image_fetch_timeout: float = 30.0

    # Obergrenze paralleler Pipelines im Bulk-Run
    bulk_max_concurrency: int = 5


settings = Settings()
