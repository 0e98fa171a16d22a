# repository/outcome_repository.py
import logging
from typing import List, Optional
from redis.asyncio import Redis
from config.cache import get_redis
from config.settings import settings
from model.outcome import QueryOutcome
from repository.namespaces import OUTCOMES

logger = logging.getLogger(__name__)


class OutcomeRepository:
    """
    Flow:
    - RPUSH each outcome as JSON onto one Redis list (atomic append).
    - LTRIM to the newest `max_entries` so the log cannot grow without bound.
    - LRANGE reads everything back for analytics.
    """

    def __init__(
        self,
        max_entries: int = settings.OUTCOME_LOG_MAX_ENTRIES,
        client: Optional[Redis] = None,
    ) -> None:
        self._max = int(max_entries)
        self._redis = client

    async def _client(self) -> Redis:
        # Shared app client unless one was injected.
        if self._redis is not None:
            return self._redis
        return await get_redis()

    async def append(self, outcome: QueryOutcome) -> None:
        r = await self._client()
        payload = outcome.model_dump_json().encode("utf-8")
        async with r.pipeline(transaction=True) as pipe:
            pipe.rpush(OUTCOMES, payload)
            pipe.ltrim(OUTCOMES, -self._max, -1)
            await pipe.execute()

    async def all(self) -> List[QueryOutcome]:
        r = await self._client()
        vals = await r.lrange(OUTCOMES, 0, -1)
        out: List[QueryOutcome] = []
        for raw in vals or []:
            try:
                out.append(QueryOutcome.model_validate_json(raw))
            except ValueError:
                # Skip malformed entries instead of failing the whole report
                logger.warning("outcome.read.malformed")
                continue
        return out
