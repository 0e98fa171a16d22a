# util/timing.py
import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator


def elapsed_ms(t0: float) -> int:
    """Milliseconds since a `time.perf_counter()` reading."""
    return int((time.perf_counter() - t0) * 1000)


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    Log how long a block took, and whether it raised:

      with timed(logger, "ai.anthropic", model="claude-3-haiku"):
          ...

    -> "ai.anthropic.done ms=812 ok=true model=claude-3-haiku"

    Failures are logged at WARNING with ok=false and the exception re-raised.
    """
    t0 = time.perf_counter()
    suffix = "".join(f" {k}={v}" for k, v in kv.items())
    try:
        yield
    except BaseException:
        logger.warning("%s.done ms=%d ok=false%s", name, elapsed_ms(t0), suffix)
        raise
    logger.info("%s.done ms=%d ok=true%s", name, elapsed_ms(t0), suffix)
