"""Crawl result data model."""
from enum import Enum
from typing import NamedTuple


class CrawlPhase(str, Enum):
    RUNNING = "running"
    DRAINING = "draining"
    FINISHED = "finished"


class CrawlResult(NamedTuple):
    """Result of a crawl operation.

    Provides feedback about what happened during the crawl,
    enabling callers to log metrics and distinguish success from cancellation.
    """
    pages_fetched: int
    """Number of tasks whose fetch completed (any status code)"""

    stopped: bool
    """True if crawl was stopped early via stop_event, False if completed normally"""

    phase: CrawlPhase = CrawlPhase.FINISHED
    """Phase the crawl was in when `crawl()` returned"""
