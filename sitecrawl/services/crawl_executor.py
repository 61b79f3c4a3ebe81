import logging
from typing import Optional
from urllib.parse import urlsplit

from sitecrawl.domain.cache_control import read_cache_control
from sitecrawl.domain.crawl_result import CrawlPhase, CrawlResult
from sitecrawl.domain.fetch_result import FetchResult
from sitecrawl.domain.run_config import RunConfig
from sitecrawl.domain.task import CrawlTask, format_elapsed_ms
from sitecrawl.exceptions import InvalidSeedUrlError
from sitecrawl.services.crawl_policy import CrawlPolicy
from sitecrawl.services.fetch_dispatcher import FetchDispatcher
from sitecrawl.services.link_extractor import LinkExtractor
from sitecrawl.services.task_pool import TaskPool

logger = logging.getLogger(__name__)
progress_logger = logging.getLogger("sitecrawl.progress")


def base_url_for(seed_url: str) -> str:
    """Return `scheme://host[:port]` for a seed, dropping path, query and credentials.

    An explicit port is kept, unlike a bare `scheme://host` base, so a crawl
    seeded on a non-default port stays on that port.

    Raises `InvalidSeedUrlError` when the seed has no scheme or no host.
    """
    try:
        parts = urlsplit(seed_url)
    except ValueError as e:
        raise InvalidSeedUrlError(seed_url, str(e)) from e
    if not parts.scheme or not parts.hostname:
        raise InvalidSeedUrlError(seed_url)
    scheme = "http" if seed_url.startswith("http:") else "https"
    host = parts.netloc.rpartition("@")[2]
    return f"{scheme}://{host}"


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    This class owns the crawl control-flow: the frontier, the concurrency
    cap, the page limit and termination. Fetches run on the dispatcher's
    worker pool; their results are applied here, on the thread that called
    `crawl()`, which is the only thread that ever mutates the frontier.
    """

    def __init__(
        self,
        *,
        run_config: RunConfig,
        dispatcher: FetchDispatcher,
        link_extractor: Optional[LinkExtractor] = None,
        crawl_policy: Optional[CrawlPolicy] = None,
        poll_interval: float = 0.1,
    ):
        self.run_config = run_config
        self.dispatcher = dispatcher
        self.link_extractor = link_extractor or LinkExtractor()
        self.crawl_policy = crawl_policy or CrawlPolicy(run_config.filters)
        self.poll_interval = poll_interval

        self.pool: Optional[TaskPool] = None
        self.base_url: Optional[str] = None
        self.phase = CrawlPhase.RUNNING
        self.pages_fetched = 0

    def _is_stopped(self, stop_event) -> bool:
        return stop_event is not None and getattr(stop_event, "is_set", lambda: False)()

    def _limit_reached(self) -> bool:
        limit = self.run_config.limit
        if limit <= 0:
            return False
        in_flight, done = self.pool.counts_for_limit()
        return in_flight + done >= limit

    def refill(self) -> None:
        """Dispatch open tasks until the cap, the limit or the frontier runs out."""
        if self.phase is not CrawlPhase.RUNNING:
            return
        while self.pool.count_in_flight() < self.run_config.concurrency:
            if self._limit_reached():
                logger.info("Page limit %s reached; draining", self.run_config.limit)
                self.phase = CrawlPhase.DRAINING
                return
            task = self.pool.take_open()
            if task is None:
                return
            logger.debug("Dispatching %s", task.url)
            self.dispatcher.dispatch(task)

    def _update_phase(self) -> None:
        if self.pool.count_in_flight() > 0:
            return
        if self.pool.count_open() > 0:
            # Open work left but nothing can be dispatched (limit hit or cap 0).
            logger.info("No tasks in flight and none dispatchable; %s left open", self.pool.count_open())
        self.phase = CrawlPhase.FINISHED

    def on_fetch_complete(self, task: CrawlTask, result: FetchResult) -> None:
        task.status_code = result.status_code
        task.response_headers = result.headers
        task.elapsed_ms = result.elapsed_ms

        for link in self.link_extractor.extract_links(result.body, self.base_url):
            if self.crawl_policy.is_blacklisted(link):
                self.pool.enqueue_blacklisted(link, task.id)
            else:
                self.pool.enqueue(link, task.id)

        self.pool.mark_done(task)
        self.pages_fetched += 1
        self._log_completed(task)
        self.refill()
        self._update_phase()

    def _log_completed(self, task: CrawlTask) -> None:
        logger.info("Fetched %s -> status %s in %.1fms", task.url, task.status_code, task.elapsed_ms)
        if not self.run_config.verbose:
            return
        cc = read_cache_control(task.response_headers)
        progress_logger.info(
            "(o:%d|f:%d|b:%d|a:%d) %s %s %s %sms %s",
            self.pool.count_open(),
            self.pool.count_done(),
            self.pool.count_blacklisted(),
            self.pool.count_all(),
            task.status_code,
            "true" if cc.cacheable else "false",
            cc.max_age,
            format_elapsed_ms(task.elapsed_ms),
            task.url,
        )

    def crawl(self, seed_url: str, stop_event=None) -> CrawlResult:
        """Crawl the seed's host until the frontier drains, the limit is hit or `stop_event` is set.

        An executor runs one crawl: the dispatcher is shut down when it ends.
        Build a new executor (the container's `crawl_executor` factory) per run.
        """
        if self.pool is not None:
            raise RuntimeError("CrawlExecutor is single-use; build a new one for each crawl")
        self.base_url = base_url_for(seed_url)
        self.pool = TaskPool()

        self.pool.enqueue(seed_url)
        logger.info("Starting crawl of %s (base %s)", seed_url, self.base_url)
        self.refill()
        self._update_phase()

        try:
            while self.phase is not CrawlPhase.FINISHED:
                if self._is_stopped(stop_event):
                    logger.info("Crawl cancelled with %s tasks in flight", self.pool.count_in_flight())
                    return CrawlResult(pages_fetched=self.pages_fetched, stopped=True, phase=self.phase)
                self.dispatcher.deliver(self, timeout=self.poll_interval)
        finally:
            # In-flight fetches are abandoned, never awaited.
            self.dispatcher.shutdown(wait=False)

        logger.info("Crawl finished: %s fetched, %s discovered", self.pages_fetched, self.pool.count_all())
        return CrawlResult(pages_fetched=self.pages_fetched, stopped=False, phase=self.phase)
