from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RunConfig:
    """Settings for a single crawl run; immutable once the run starts.

    - `concurrency` caps how many tasks may be in flight at once. 0 means
      nothing is ever dispatched.
    - `limit` caps in-flight + done tasks; 0 means unlimited.
    - `filters` are plain substrings; a discovered URL containing any of
      them is recorded as blacklisted instead of fetched.
    """

    concurrency: int = 1
    limit: int = 0
    filters: Tuple[str, ...] = ()
    verbose: bool = False
    output_path: Optional[str] = None

    def __post_init__(self):
        if self.concurrency < 0:
            raise ValueError("concurrency must be >= 0")
        if self.limit < 0:
            raise ValueError("limit must be >= 0")
        object.__setattr__(self, "filters", tuple(self.filters))

    @staticmethod
    def parse_filters(raw: Optional[str]) -> Tuple[str, ...]:
        """Split a comma-separated filter list, dropping all whitespace first.

        `None` yields no filters. An empty string yields a single empty
        filter, which matches every URL.
        """
        if raw is None:
            return ()
        return tuple("".join(raw.split()).split(","))
