"""
Bounded worker pool for the export phase.
A fixed number of asyncio workers pull entries from a queue, so at most
`capacity` entries are in flight. The first failure stops admission: the
queue is drained, in-flight entries finish, and the error is re-raised.
"""

import asyncio
import logging
import os
from typing import Optional, List, Any, Awaitable, Callable, Iterable

logger = logging.getLogger(__name__)


def default_capacity() -> int:
    return os.cpu_count() or 1


class BoundedWorkerPool:
    """Runs an async handler over items with bounded concurrency and fail-fast shutdown."""

    def __init__(self, capacity: Optional[int] = None):
        self.capacity = max(1, capacity or default_capacity())
        self.in_flight = 0
        self.peak_in_flight = 0
        self.completed = 0
        self.drained = 0
        self._stopping = False

    @property
    def stopping(self) -> bool:
        return self._stopping

    def _acquire(self) -> None:
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)

    def _release(self) -> None:
        self.in_flight -= 1

    def _shutdown(self, queue: asyncio.Queue) -> None:
        self._stopping = True
        while True:
            try:
                queue.get_nowait()
            except asyncio.QueueEmpty:
                break
            self.drained += 1
        if self.drained:
            logger.warning(f"[POOL] Stopped admitting work, drained {self.drained} pending entries")

    async def run(self, items: Iterable[Any], handler: Callable[[Any], Awaitable[None]]) -> None:
        queue: asyncio.Queue = asyncio.Queue()
        for item in items:
            queue.put_nowait(item)
        if queue.empty():
            return

        errors: List[BaseException] = []

        async def worker() -> None:
            while not self._stopping:
                try:
                    item = queue.get_nowait()
                except asyncio.QueueEmpty:
                    return
                self._acquire()
                try:
                    await handler(item)
                    self.completed += 1
                except Exception as e:
                    errors.append(e)
                    self._shutdown(queue)
                finally:
                    self._release()

        workers = [asyncio.create_task(worker()) for _ in range(min(self.capacity, queue.qsize()))]
        await asyncio.gather(*workers)
        if errors:
            raise errors[0]
