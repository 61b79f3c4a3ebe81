from typing import Mapping, Optional, Set


def format_elapsed_ms(elapsed_ms: float) -> str:
    """Render milliseconds in fixed notation, trailing zeros stripped (`12.5`, `3`, `0`)."""
    return ("%.3f" % elapsed_ms).rstrip("0").rstrip(".")


class CrawlTask:
    """One discovered URL plus its fetch outcome and the tasks that referenced it."""

    def __init__(self, task_id: int, url: str):
        self.id = task_id
        self.url = url
        self.parent_ids: Set[int] = set()
        self.status_code: int = 0
        self.elapsed_ms: float = 0.0
        self.response_headers: Optional[Mapping[str, str]] = None

    def add_parent(self, parent_id: Optional[int]) -> None:
        if parent_id is not None:
            self.parent_ids.add(parent_id)

    def __repr__(self):
        return f"<CrawlTask id={self.id} url={self.url} status={self.status_code}>"
