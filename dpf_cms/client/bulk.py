"""
Bounded-concurrency runner for bulk operations.

A fixed pool of workers drains a shared queue of ids; every id ends up in
either ``succeeded`` or ``failed`` exactly once.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, List, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass
class BulkRunResult(Generic[T]):
    succeeded: List[T] = field(default_factory=list)
    failed: List[Tuple[T, BaseException]] = field(default_factory=list)

    @property
    def failed_ids(self) -> List[T]:
        return [item for item, _ in self.failed]


async def run_with_concurrency(
    ids: Sequence[T], concurrency: int, worker: Callable[[T], Awaitable[object]]
) -> BulkRunResult[T]:
    """Run ``worker`` for every id using ``max(1, concurrency)`` workers, never more than ``len(ids)``.

    Exceptions from ``worker`` are recorded per id and never stop the run.
    """
    result: BulkRunResult[T] = BulkRunResult()
    if not ids:
        return result

    queue: asyncio.Queue = asyncio.Queue()
    for item in ids:
        queue.put_nowait(item)

    async def drain() -> None:
        while True:
            try:
                item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                await worker(item)
            except Exception as e:
                result.failed.append((item, e))
            else:
                result.succeeded.append(item)

    workers = min(max(1, concurrency), len(ids))
    await asyncio.gather(*(drain() for _ in range(workers)))
    return result
