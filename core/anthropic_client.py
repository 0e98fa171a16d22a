# core/anthropic_client.py
import logging
from typing import Any, Dict, Optional
import httpx
from config.settings import settings
from core.http_client import request_json
from core.prompts import syllabus_user_message
from util.errors import ProviderFailure
from util.timing import timed

logger = logging.getLogger(__name__)


def _first_text(data: Dict[str, Any]) -> str:
    content = data.get("content") or []
    if isinstance(content, list):
        for node in content:
            if isinstance(node, dict) and node.get("type") == "text":
                return str(node.get("text") or "")
    return ""


class AnthropicProvider:
    """
    Primary completion tier: Anthropic Messages API over raw httpx.
    """

    name = "anthropic"

    def __init__(
        self,
        *,
        api_key: Optional[str],
        model: str = settings.ANTHROPIC_MODEL,
        api_url: str = settings.ANTHROPIC_API_URL,
        version: str = settings.ANTHROPIC_VERSION,
        max_tokens: int = settings.ANTHROPIC_MAX_TOKENS,
        timeout: float = settings.PROVIDER_TIMEOUT_SECONDS,
        max_retries: int = settings.PROVIDER_MAX_RETRIES,
        backoff: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._url = api_url
        self._version = version
        self._max_tokens = max_tokens
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff = backoff
        self._transport = transport

    async def complete(self, grounding_text: str, question: str) -> str:
        if not self._api_key:
            raise ProviderFailure(self.name, "missing api key")

        headers = {
            "x-api-key": self._api_key,
            "anthropic-version": self._version,
            "content-type": "application/json",
        }
        payload = {
            "model": self._model,
            "max_tokens": self._max_tokens,
            "system": settings.SYLLABUS_SYSTEM_PROMPT,
            "messages": [
                {"role": "user", "content": syllabus_user_message(grounding_text, question)}
            ],
            "temperature": 0.0,
        }
        with timed(logger, "ai.anthropic", model=self._model):
            data = await request_json(
                "POST",
                self._url,
                provider=self.name,
                headers=headers,
                payload=payload,
                timeout=self._timeout,
                max_retries=self._max_retries,
                backoff=self._backoff,
                transport=self._transport,
            )

        text = _first_text(data if isinstance(data, dict) else {}).strip()
        if not text:
            raise ProviderFailure(self.name, "empty completion")
        usage = data.get("usage") or {}
        logger.info(
            "ai.anthropic.ok chars=%d in_tokens=%s out_tokens=%s",
            len(text),
            usage.get("input_tokens"),
            usage.get("output_tokens"),
        )
        return text
