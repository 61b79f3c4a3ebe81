import logging
from typing import Iterable

logger = logging.getLogger(__name__)


class CrawlPolicy:
    """Decides whether a discovered link is fetched or only recorded.

    Matching is plain substring containment. An empty filter is contained
    in every string, so `-filter ""` blacklists every discovered link.
    """

    def __init__(self, filters: Iterable[str] = ()):
        self.filters = tuple(filters)

    def is_blacklisted(self, url: str) -> bool:
        for needle in self.filters:
            if needle in url:
                logger.debug("Skipping (blacklisted by %r) %s", needle, url)
                return True
        return False
