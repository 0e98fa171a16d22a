# core/gemini_client.py
import logging
from typing import Any, Dict, Optional
import httpx
from config.settings import settings
from core.prompts import syllabus_user_message
from core.http_client import request_json
from util.errors import ProviderFailure
from util.timing import timed

logger = logging.getLogger(__name__)


def _candidate_text(data: Dict[str, Any]) -> str:
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict))


class GeminiProvider:
    """
    Secondary completion tier: Gemini generateContent REST endpoint.
    """

    name = "gemini"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = settings.GEMINI_MODEL,
        api_url: str = settings.GEMINI_API_URL,
        max_tokens: int = settings.GEMINI_MAX_TOKENS,
        timeout: float = settings.PROVIDER_TIMEOUT_SECONDS,
        max_retries: int = settings.PROVIDER_MAX_RETRIES,
        backoff: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._url = api_url.format(model=model)
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff = backoff
        self._transport = transport

    async def complete(self, grounding_text: str, question: str) -> str:
        if not self._api_key:
            raise ProviderFailure(self.name, "missing api key")

        payload = {
            "systemInstruction": {"parts": [{"text": settings.SYLLABUS_SYSTEM_PROMPT}]},
            "contents": [
                {
                    "role": "user",
                    "parts": [{"text": syllabus_user_message(grounding_text, question)}],
                }
            ],
            "generationConfig": {
                "temperature": 0.0,
                "maxOutputTokens": self._max_tokens,
            },
        }
        with timed(logger, "ai.gemini", model=self._model):
            data = await request_json(
                "POST",
                self._url,
                provider=self.name,
                headers={
                    "x-goog-api-key": self._api_key,
                    "content-type": "application/json",
                },
                payload=payload,
                timeout=self._timeout,
                max_retries=self._max_retries,
                backoff=self._backoff,
                transport=self._transport,
            )

        text = _candidate_text(data if isinstance(data, dict) else {}).strip()
        if not text:
            raise ProviderFailure(self.name, "empty completion")
        logger.info("ai.gemini.ok chars=%d", len(text))
        return text
