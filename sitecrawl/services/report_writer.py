import logging
import os
from typing import Iterable, Optional

from sitecrawl.domain.cache_control import read_cache_control
from sitecrawl.domain.task import CrawlTask, format_elapsed_ms

logger = logging.getLogger(__name__)

REPORT_HEADER = "ID Parent_Ids HTTP_CODE cacheable maxAge Request_Time_MS URL"


def format_task_line(task: CrawlTask) -> str:
    cc = read_cache_control(task.response_headers)
    parents = ",".join(str(pid) for pid in sorted(task.parent_ids))
    return " ".join([
        str(task.id),
        parents,
        str(task.status_code),
        "true" if cc.cacheable else "false",
        str(cc.max_age),
        format_elapsed_ms(task.elapsed_ms),
        task.url,
    ])


def render_report(tasks: Iterable[CrawlTask]) -> str:
    lines = [REPORT_HEADER]
    lines.extend(format_task_line(task) for task in tasks)
    return "\n".join(lines) + "\n"


class ReportWriter:
    """Writes the crawl report to a file.

    I/O failures are logged and reported through the return value; they
    never propagate into the crawl.
    """

    def __init__(self, output_path: Optional[str]):
        self.path = os.path.abspath(os.path.expanduser(output_path)) if output_path else None

    @property
    def enabled(self) -> bool:
        return self.path is not None

    def create_empty(self) -> bool:
        """Create the report file, truncating any previous content."""
        if not self.enabled:
            return False
        try:
            with open(self.path, "w", encoding="utf-8"):
                pass
        except OSError as e:
            logger.error("Could not create output file at location: %s (%s)", self.path, e)
            return False
        return True

    def write(self, tasks: Iterable[CrawlTask]) -> bool:
        if not self.enabled:
            return False
        logger.info("Generate Output at: %s", self.path)
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                f.write(render_report(tasks))
        except OSError as e:
            logger.error("Error writing to file %s: %s", self.path, e)
            return False
        return True
