# core/http_client.py
import asyncio
import logging
from typing import Any, Dict, Optional
import httpx
from util.errors import ProviderFailure

logger = logging.getLogger(__name__)

# Gateway-style statuses worth another try; everything else is a semantic failure.
TRANSIENT_STATUSES = frozenset({502, 503, 504})


async def request_json(
    method: str,
    url: str,
    *,
    provider: str,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, str]] = None,
    payload: Optional[Dict[str, Any]] = None,
    timeout: float = 45.0,
    max_retries: int = 2,
    backoff: float = 0.5,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    expect_json: bool = True,
    follow_redirects: bool = False,
) -> Any:
    """
    Send one request, retrying at most `max_retries` times on transport errors
    and gateway statuses. Returns parsed JSON (or text when `expect_json` is
    False). Redirects are followed only when `follow_redirects` is set;
    otherwise a 3xx, like any other failure, raises ProviderFailure without a retry.
    """
    attempts = max(0, max_retries) + 1
    last_reason = "no attempt made"
    async with httpx.AsyncClient(
        timeout=timeout, transport=transport, follow_redirects=follow_redirects
    ) as client:
        for attempt in range(1, attempts + 1):
            try:
                r = await client.request(
                    method, url, headers=headers, params=params, json=payload
                )
            except httpx.TransportError as e:
                last_reason = f"transport:{type(e).__name__}"
                logger.warning(
                    "http.transient provider=%s attempt=%d/%d reason=%s",
                    provider,
                    attempt,
                    attempts,
                    last_reason,
                )
            else:
                if r.status_code in TRANSIENT_STATUSES:
                    last_reason = f"status:{r.status_code}"
                    logger.warning(
                        "http.transient provider=%s attempt=%d/%d reason=%s",
                        provider,
                        attempt,
                        attempts,
                        last_reason,
                    )
                elif r.is_success:
                    if not expect_json:
                        return r.text
                    try:
                        return r.json()
                    except ValueError:
                        raise ProviderFailure(provider, "malformed json body") from None
                else:
                    # 4xx including 429 quota errors: retrying will not help.
                    raise ProviderFailure(provider, f"status:{r.status_code}")

            if attempt < attempts and backoff > 0:
                await asyncio.sleep(backoff * attempt)

    raise ProviderFailure(provider, last_reason)
