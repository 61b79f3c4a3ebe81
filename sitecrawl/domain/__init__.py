"""Domain objects for SiteCrawl - explicit re-exports to satisfy linters."""
from .task import CrawlTask as CrawlTask
from .fetch_result import FetchResult as FetchResult
from .crawl_result import CrawlPhase as CrawlPhase
from .crawl_result import CrawlResult as CrawlResult
from .run_config import RunConfig as RunConfig
from .cache_control import CacheControl as CacheControl

__all__ = ["CrawlTask", "FetchResult", "CrawlPhase", "CrawlResult", "RunConfig", "CacheControl"]
