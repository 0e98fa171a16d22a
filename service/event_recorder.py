# service/event_recorder.py
import asyncio
import logging
from typing import Optional
from core.interfaces import OutcomeSink
from model.outcome import QueryOutcome

logger = logging.getLogger(__name__)


class EventRecorder:
    """
    Non-blocking outcome dispatch.

    `record` only enqueues (dropping with a warning when the bounded queue is
    full). A single worker task drains the queue into the sink, so appends never
    interleave and a slow or failing sink never reaches the query path.
    """

    def __init__(self, sink: OutcomeSink, maxsize: int = 256) -> None:
        self._sink = sink
        self._queue: asyncio.Queue[QueryOutcome] = asyncio.Queue(maxsize=maxsize)
        self._worker: Optional[asyncio.Task] = None
        self.dropped = 0

    @property
    def running(self) -> bool:
        return self._worker is not None and not self._worker.done()

    def start(self) -> None:
        if self.running:
            return
        self._worker = asyncio.get_running_loop().create_task(
            self._run(), name="outcome-recorder"
        )
        logger.info("recorder.start maxsize=%d", self._queue.maxsize)

    def record(self, outcome: QueryOutcome) -> None:
        try:
            self._queue.put_nowait(outcome)
        except asyncio.QueueFull:
            self.dropped += 1
            logger.warning(
                "recorder.drop reason=queue_full hash=%s dropped=%d",
                outcome.questionHash,
                self.dropped,
            )

    async def _write(self, outcome: QueryOutcome) -> None:
        try:
            await self._sink.append(outcome)
        except Exception as e:
            logger.error(
                "recorder.write.error hash=%s err=%s", outcome.questionHash, type(e).__name__
            )

    async def _run(self) -> None:
        while True:
            outcome = await self._queue.get()
            try:
                await self._write(outcome)
            finally:
                self._queue.task_done()

    async def stop(self, timeout: float = 5.0) -> None:
        """Drain what is queued (bounded by `timeout`), then stop the worker."""
        if self._worker is None:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("recorder.stop.timeout pending=%d", self._queue.qsize())
        self._worker.cancel()
        try:
            await self._worker
        except asyncio.CancelledError:
            pass
        self._worker = None
        logger.info("recorder.stop dropped=%d", self.dropped)
