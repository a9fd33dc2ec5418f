"""
Worker Pool - Fixed set of async workers draining a shared queue.
"""

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class WorkerPool(Generic[T]):
    """
    Async worker pool for queue-based task processing.

    Features:
    - Fixed number of workers, each handling one item at a time
    - Every item is taken by exactly one worker
    - Optional cancellation event: workers stop taking new items once set
    """

    def __init__(
        self,
        workers: int,
        fn: Callable[[T], Awaitable[None]],
    ):
        """
        Create a new worker pool.

        Args:
            workers: Number of concurrent workers
            fn: Async function to process each item
        """
        self.workers = max(1, workers)
        self.fn = fn
        self.processed = 0

    async def _worker(
        self,
        queue: "asyncio.Queue[T]",
        cancel: asyncio.Event | None,
    ) -> None:
        while cancel is None or not cancel.is_set():
            try:
                item = queue.get_nowait()
            except asyncio.QueueEmpty:
                return
            try:
                await self.fn(item)
                self.processed += 1
            finally:
                queue.task_done()

    async def run(
        self,
        items: Iterable[T],
        cancel: asyncio.Event | None = None,
    ) -> int:
        """
        Process all items and wait for every worker to finish.

        Args:
            items: Items to process; the queue is filled before workers start
            cancel: When set, workers finish their current item and exit

        Returns:
            Number of items processed

        Raises:
            Exception: the first error raised by fn, after every other
                worker has been cancelled and awaited
        """
        queue: asyncio.Queue[T] = asyncio.Queue()
        for item in items:
            queue.put_nowait(item)
        if queue.empty():
            return 0

        count = min(self.workers, queue.qsize())
        tasks = [asyncio.create_task(self._worker(queue, cancel)) for _ in range(count)]
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return self.processed
