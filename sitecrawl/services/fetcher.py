from __future__ import annotations

import logging
import time
from typing import Protocol

from sitecrawl.domain.fetch_result import FetchResult
from sitecrawl.exceptions import HttpFetchError

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


class Fetcher(Protocol):
    """Fetch a URL and report status, headers, body and elapsed time.

    Implementations must not raise for transport problems; they report
    them as a status-500 result instead.
    """

    def fetch(self, url: str) -> FetchResult: ...


class HttpServiceFetcher:
    def __init__(self, http_service):
        self._http_service = http_service

    def fetch(self, url: str) -> FetchResult:
        started = time.perf_counter()
        try:
            resp = self._http_service.fetch(url)
        except HttpFetchError as e:
            logger.warning("Fetch failed for %s: %s", url, e)
            return FetchResult.transport_failure(_elapsed_ms(started))
        elapsed = _elapsed_ms(started)
        if resp.status_code < 200 or resp.status_code >= 300:
            # Error pages keep status and headers but contribute no links.
            logger.info("Non-success status for %s: %s", url, resp.status_code)
            return FetchResult(resp.status_code, dict(resp.headers), "", elapsed)
        return FetchResult(resp.status_code, dict(resp.headers), resp.text or "", elapsed)
