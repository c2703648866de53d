# util/timing.py
import time
from contextlib import contextmanager
from typing import Iterator, Any
import logging


@contextmanager
def timed(logger: logging.Logger, name: str, **kv: Any) -> Iterator[None]:
    """
    with timed(logger, "tenant.append", ns=namespace_id): ...
    -> DEBUG "tenant.append.done ms=3 ok=True ns=..."
    ok=False when the block raised; the exception still propagates.
    """
    t0 = time.perf_counter()
    ok = False
    try:
        yield
        ok = True
    finally:
        dt_ms = int((time.perf_counter() - t0) * 1000)
        suffix = "".join(f" {k}={v}" for k, v in kv.items())
        logger.debug("%s.done ms=%d ok=%s%s", name, dt_ms, ok, suffix)
