from __future__ import annotations

import logging
import queue
import time
from concurrent.futures import Future, ThreadPoolExecutor
from functools import partial
from typing import Optional, Protocol, Tuple

from sitecrawl.domain.fetch_result import FetchResult
from sitecrawl.domain.task import CrawlTask

logger = logging.getLogger(__name__)


class FetchCompletionListener(Protocol):
    """Receives finished fetches on the thread that called `deliver()`."""

    def on_fetch_complete(self, task: CrawlTask, result: FetchResult) -> None: ...


class FetchDispatcher:
    """Runs fetches on a worker pool and hands their results back as messages.

    Worker threads never touch crawl state: the done-callback only puts
    `(task, result)` on a queue. The owning thread drains that queue with
    `deliver()`, which is where task/frontier mutation happens.

    The pool size is independent of the crawl's concurrency cap; the cap is
    enforced by the caller through the number of tasks it dispatches.
    """

    def __init__(self, fetcher, max_workers: Optional[int] = None):
        self._fetcher = fetcher
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="sitecrawl-fetch")
        self._completions: "queue.Queue[Tuple[CrawlTask, FetchResult]]" = queue.Queue()

    def dispatch(self, task: CrawlTask) -> None:
        started = time.perf_counter()
        future = self._executor.submit(self._fetcher.fetch, task.url)
        future.add_done_callback(partial(self._on_done, task, started))

    def _on_done(self, task: CrawlTask, started: float, future: Future) -> None:
        # Runs on a worker thread (or inline if the future already finished).
        if future.cancelled():
            return
        try:
            result = future.result()
        except Exception:
            logger.exception("Unexpected fetch error for %s", task.url)
            result = FetchResult.transport_failure((time.perf_counter() - started) * 1000)
        self._completions.put((task, result))

    def deliver(self, listener: FetchCompletionListener, timeout: Optional[float] = None) -> bool:
        """Wait for one completion and pass it to `listener`.

        Returns False if nothing completed within `timeout` seconds.
        """
        try:
            task, result = self._completions.get(timeout=timeout)
        except queue.Empty:
            return False
        listener.on_fetch_complete(task, result)
        return True

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait, cancel_futures=True)
