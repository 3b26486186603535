"""Wait-for-all join over a thread pool."""

import concurrent.futures
from dataclasses import dataclass
from typing import Any, Callable


@dataclass
class Settled:
    """Outcome of one call: either a value or the exception it raised."""
    value: Any = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def gather_settled(calls: list[Callable[[], Any]], max_workers: int = 8) -> list[Settled]:
    """Run every call concurrently and wait until all of them have settled.

    Results come back in submission order. A failing call never cancels or
    short-circuits the others; its exception is stored on its Settled slot.
    """
    if not calls:
        return []

    results = [Settled() for _ in calls]
    workers = max(1, min(max_workers, len(calls)))
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
        futures = {pool.submit(call): i for i, call in enumerate(calls)}
        for future in concurrent.futures.as_completed(futures):
            i = futures[future]
            try:
                results[i] = Settled(value=future.result())
            except Exception as e:
                results[i] = Settled(error=e)
    return results
