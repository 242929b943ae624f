import asyncio
import logging
from typing import Awaitable, Callable, List, Sequence, TypeVar

from osmetrics.core.exceptions import PoolFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_CONCURRENCY = 10


async def run_pool(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    concurrency: int = DEFAULT_CONCURRENCY,
) -> List[R]:
    """
    Runs `worker` over every item with at most `concurrency` calls in flight.

    A fixed set of asyncio tasks pulls pending items from a queue. The run is
    fail-fast: after the first failure no new item is dispatched, calls
    already in flight are left to settle and their results are dropped.

    Returns:
        The worker results, in the order of `items`.

    Raises:
        PoolFailure: Wrapping the first error raised by `worker`.
        ValueError: If `concurrency` is below 1.
    """
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")

    queue: asyncio.Queue = asyncio.Queue()
    for index, item in enumerate(items):
        queue.put_nowait((index, item))

    results: List[R] = [None] * len(items)
    failures: List[PoolFailure] = []

    async def _run_worker():
        while not failures:
            try:
                index, item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                results[index] = await worker(item)
            except Exception as e:
                if not failures:
                    logger.debug(f"Pool task for {item} failed, stopping dispatch: {e}")
                    failures.append(PoolFailure(item, e))
                return

    worker_count = min(concurrency, len(items))
    await asyncio.gather(*(_run_worker() for _ in range(worker_count)))

    if failures:
        failure = failures[0]
        raise failure from failure.error

    return results
