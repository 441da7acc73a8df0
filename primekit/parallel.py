"""
Data-parallel fan-out over index ranges.

Ranges are cut into contiguous chunks, roughly `chunks_per_worker` per
worker for load balancing, and each chunk runs on a thread pool.
Workers poll the cancellation token before every item.
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from os import cpu_count
from typing import Callable, List, Optional, Tuple

from .cancellation import CancellationToken, is_cancelled
from .errors import OperationCancelled

MIN_CHUNK_SIZE = 256


def split_range(start: int, stop: int, num_chunks: int,
                min_chunk: int = MIN_CHUNK_SIZE) -> List[Tuple[int, int]]:
    """
    Cut [start, stop) into at most `num_chunks` contiguous (lo, hi) pieces.

    Pieces hold at least `min_chunk` items except possibly the last one.
    An empty range gives an empty list.
    """
    total = stop - start
    if total <= 0:
        return []
    size = max(min_chunk, -(-total // max(1, num_chunks)))
    return [(lo, min(lo + size, stop)) for lo in range(start, stop, size)]


def _run_chunk(lo: int, hi: int, body: Callable[[int], None],
               token: Optional[CancellationToken]) -> None:
    for i in range(lo, hi):
        if is_cancelled(token):
            return
        body(i)


def parallel_for(start: int, stop: int, body: Callable[[int], None],
                 token: Optional[CancellationToken] = None,
                 num_workers: Optional[int] = None,
                 chunks_per_worker: int = 4) -> None:
    """
    Call body(i) for every i in [start, stop) on a thread pool.

    Parameters
    ----------
    start, stop : int
        Half-open index range. Empty ranges return immediately.
    body : callable
        Work item. Must be safe to run concurrently with itself.
    token : CancellationToken, optional
        Polled before each item.
    num_workers : int, optional
        Pool size. Defaults to CPU count.
    chunks_per_worker : int
        Chunks scheduled per worker.

    Raises
    ------
    OperationCancelled
        If the token was cancelled; items already run keep their effects.
    Exception
        The first exception raised by a work item. Unstarted chunks are
        dropped.
    """
    if num_workers is None:
        num_workers = cpu_count() or 1

    chunks = split_range(start, stop, num_workers * chunks_per_worker)
    if chunks and not is_cancelled(token):
        with ThreadPoolExecutor(max_workers=num_workers) as pool:
            futures = [pool.submit(_run_chunk, lo, hi, body, token) for lo, hi in chunks]
            try:
                for future in futures:
                    future.result()
            except BaseException:
                for future in futures:
                    future.cancel()
                raise

    if is_cancelled(token):
        raise OperationCancelled("parallel loop was cancelled")


def submit(executor: Optional[Executor], fn: Callable, *args) -> Future:
    """Submit fn(*args) to `executor`, or to a one-off single-thread pool."""
    if executor is not None:
        return executor.submit(fn, *args)
    pool = ThreadPoolExecutor(max_workers=1)
    try:
        return pool.submit(fn, *args)
    finally:
        pool.shutdown(wait=False)
