"""Batched concurrent execution of per-file workers."""

import asyncio
import os
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, List, Optional, Sequence, Tuple, TypeVar

from ..exceptions import CancellationRequested

T = TypeVar('T')
R = TypeVar('R')


def default_concurrency(item_count: int) -> int:
    """Batch width for file reads: 30 above 500 items, 25 above 100, else 20."""
    if item_count > 500:
        return 30
    if item_count > 100:
        return 25
    return 20


def optimal_concurrency() -> int:
    """CPU-based width: twice the CPU count, at least 20, at most 200."""
    cpu_count = os.cpu_count() or 4
    return min(max(cpu_count * 2, 20), 200)


@dataclass
class BatchOutcome(Generic[T, R]):
    """Results of a coordinated run."""
    results: List[R] = field(default_factory=list)  # successful results, item order
    failures: List[Tuple[T, BaseException]] = field(default_factory=list)
    processed: int = 0  # items whose worker finished, failed or not


class ConcurrencyCoordinator:
    """
    Runs an async worker over items in consecutive batches.

    At most ``max_concurrency`` workers are in flight; batch N finishes
    before batch N+1 starts. The token is checked before each batch and
    after it completes. Worker exceptions are collected per item instead
    of aborting the run, except CancellationRequested which ends it.

    Usage:
        coordinator = ConcurrencyCoordinator(20, token)
        outcome = await coordinator.run(files, analyze_one)
    """

    def __init__(self, max_concurrency: int, token: Optional[Any] = None):
        """
        Args:
            max_concurrency: Batch width (>= 1)
            token: CancellationToken polled between batches

        Raises:
            ValueError: If max_concurrency is below 1
        """
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")
        self.max_concurrency = max_concurrency
        self.token = token

    def _cancelled(self) -> bool:
        return self.token is not None and self.token.cancelled

    def batches(self, items: Sequence[T]) -> List[Sequence[T]]:
        """Split items into consecutive batches of at most max_concurrency."""
        return [
            items[i:i + self.max_concurrency]
            for i in range(0, len(items), self.max_concurrency)
        ]

    async def run(
        self,
        items: Sequence[T],
        worker: Callable[[T], Awaitable[R]],
        on_progress: Optional[Callable[[T], None]] = None
    ) -> BatchOutcome:
        """
        Run ``worker`` over every item.

        Args:
            items: Items to process
            worker: Async callable applied to each item
            on_progress: Called with each item once its worker finished

        Returns:
            BatchOutcome with results in item order and per-item failures

        Raises:
            CancellationRequested: If the token was set before or during a batch
        """
        outcome = BatchOutcome()

        async def run_one(item: T) -> R:
            try:
                return await worker(item)
            finally:
                if on_progress is not None and not self._cancelled():
                    on_progress(item)

        for batch in self.batches(items):
            if self._cancelled():
                raise CancellationRequested()

            results = await asyncio.gather(
                *(run_one(item) for item in batch),
                return_exceptions=True
            )

            cancelled = False
            for item, result in zip(batch, results):
                if isinstance(result, CancellationRequested):
                    cancelled = True
                elif isinstance(result, Exception):
                    outcome.failures.append((item, result))
                    outcome.processed += 1
                elif isinstance(result, BaseException):
                    raise result
                else:
                    outcome.results.append(result)
                    outcome.processed += 1

            if cancelled or self._cancelled():
                raise CancellationRequested()

        return outcome
