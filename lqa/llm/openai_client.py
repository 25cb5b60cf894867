import os
from typing import Any, Dict, List

from openai import OpenAI

from lqa.core.config import settings
from lqa.core.errors import ConfigurationError
from lqa.llm.llm_client import LLMClient


class OpenAIClient(LLMClient):
    def __init__(
        self,
        model_name: str | None = None,
        api_key: str | None = None,
        max_tokens: int | None = None,
    ):
        self.model_name = model_name or settings.llm_model
        self.api_key = api_key or settings.openai_api_key or os.getenv("OPENAI_API_KEY")
        self.max_tokens = max_tokens or settings.llm_max_tokens
        # wird erst beim ersten Call erzeugt, damit der Import ohne Key klappt
        self._client: OpenAI | None = None

    def ensure_configured(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set. "
                "Set it in .env file or as environment variable. "
                "Required for LQA analysis."
            )

    def _get_client(self) -> OpenAI:
        self.ensure_configured()
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def complete(self, prompt: str, **kwargs: Any) -> str:
        client = self._get_client()

        messages: List[Dict[str, Any]] = []
        system_prompt = kwargs.get("system_prompt")
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        # Bilder vor dem Text, Reihenfolge = Image 1 (Source), Image 2 (Target)
        content: List[Dict[str, Any]] = [
            {"type": "image_url", "image_url": {"url": image.data_url}}
            for image in kwargs.get("images") or []
        ]
        content.append({"type": "text", "text": prompt})
        messages.append({"role": "user", "content": content})

        request: Dict[str, Any] = {
            "model": kwargs.get("model") or self.model_name,
            "messages": messages,
            "temperature": kwargs.get("temperature", 0.0),
            "max_tokens": self.max_tokens,
        }
        response_schema = kwargs.get("response_schema")
        if response_schema:
            request["response_format"] = {"type": "json_schema", "json_schema": response_schema}
        else:
            request["response_format"] = {"type": "json_object"}

        response = client.chat.completions.create(**request)
        return response.choices[0].message.content or ""
