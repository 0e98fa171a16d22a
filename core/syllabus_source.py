# core/syllabus_source.py
import logging
from typing import Any, Dict, List, Optional
import httpx
from config.settings import settings
from core.http_client import request_json
from util import functions
from util.errors import ProviderFailure
from util.timing import timed

logger = logging.getLogger(__name__)


def extract_text_from_doc(document: Dict[str, Any]) -> str:
    """
    Concatenate the text runs of every paragraph in a Google Docs API
    `documents.get` body. Tables, images and other structural elements are skipped.
    """
    out: List[str] = []
    content = (document.get("body") or {}).get("content") or []
    for element in content:
        paragraph = element.get("paragraph") if isinstance(element, dict) else None
        if not paragraph:
            continue
        for run in paragraph.get("elements") or []:
            text_run = run.get("textRun") if isinstance(run, dict) else None
            if text_run:
                out.append(str(text_run.get("content") or ""))
    return "".join(out)


class GoogleDocSource:
    """
    Live syllabus fetched from Google Docs.

    With an access token the structured Docs API is used; otherwise the
    plain-text export of a link-shared document. Returns None when the
    document cannot be fetched.
    """

    name = "syllabus_doc"

    def __init__(
        self,
        *,
        doc_id: Optional[str],
        access_token: Optional[str] = None,
        export_url: str = settings.SYLLABUS_DOC_EXPORT_URL,
        api_url: str = settings.SYLLABUS_DOCS_API_URL,
        max_chars: int = settings.GROUNDING_MAX_CHARS,
        timeout: float = settings.PROVIDER_TIMEOUT_SECONDS,
        max_retries: int = settings.PROVIDER_MAX_RETRIES,
        backoff: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._doc_id = doc_id
        self._access_token = access_token
        self._export_url = export_url
        self._api_url = api_url
        self._max_chars = max_chars
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff = backoff
        self._transport = transport

    async def _fetch_structured(self) -> str:
        data = await request_json(
            "GET",
            self._api_url.format(doc_id=self._doc_id),
            provider=self.name,
            headers={"Authorization": f"Bearer {self._access_token}"},
            timeout=self._timeout,
            max_retries=self._max_retries,
            backoff=self._backoff,
            transport=self._transport,
            follow_redirects=True,
        )
        return extract_text_from_doc(data if isinstance(data, dict) else {})

    async def _fetch_export(self) -> str:
        return await request_json(
            "GET",
            self._export_url.format(doc_id=self._doc_id),
            provider=self.name,
            timeout=self._timeout,
            max_retries=self._max_retries,
            backoff=self._backoff,
            transport=self._transport,
            expect_json=False,
            # The export endpoint answers with a redirect to googleusercontent.com.
            follow_redirects=True,
        )

    async def fetch_grounding_document(self) -> Optional[str]:
        if not self._doc_id:
            logger.warning("syllabus.fetch.skipped reason=no_doc_id")
            return None
        mode = "api" if self._access_token else "export"
        try:
            with timed(logger, "syllabus.fetch", mode=mode):
                if self._access_token:
                    text = await self._fetch_structured()
                else:
                    text = await self._fetch_export()
        except ProviderFailure as e:
            logger.error("syllabus.fetch.error mode=%s reason=%s", mode, e.reason)
            return None

        text = (text or "").strip()
        if not text:
            logger.warning("syllabus.fetch.empty mode=%s", mode)
            return None
        logger.info("syllabus.fetch.ok chars=%d", len(text))
        return functions.clip_chars(text, self._max_chars)
