from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from sitecrawl.domain.task import CrawlTask


class TaskPool:
    """
    Registry and frontier for the tasks of one crawl run.

    Owns the URL <-> id mapping and the four task partitions:
    - `open`: discovered, waiting to be dispatched
    - `in_flight`: dispatched, fetch not yet completed
    - `done`: fetch completed
    - `blacklisted`: discovered but excluded from fetching

    A task id lives in exactly one of open/in_flight/done, or in
    blacklisted. The pool is not thread-safe; all mutation must happen on
    the thread that drives the crawl.
    """

    def __init__(self):
        self._ids: Dict[str, int] = {}
        self._tasks: Dict[int, CrawlTask] = {}
        self._next_id = 0

        # OrderedDict keeps dispatch in discovery order.
        self.open: "OrderedDict[int, CrawlTask]" = OrderedDict()
        self.in_flight: Dict[int, CrawlTask] = {}
        self.done: Dict[int, CrawlTask] = {}
        self.blacklisted: Dict[int, CrawlTask] = {}

    def get_or_create_id(self, url: str) -> int:
        """Return the id for `url`, allocating the next one on first sight."""
        task_id = self._ids.get(url)
        if task_id is not None:
            return task_id
        task_id = self._next_id
        self._next_id += 1
        self._ids[url] = task_id
        self._tasks[task_id] = CrawlTask(task_id, url)
        return task_id

    def get(self, task_id: int) -> Optional[CrawlTask]:
        return self._tasks.get(task_id)

    def enqueue(self, url: str, parent_id: Optional[int] = None) -> int:
        task_id = self.get_or_create_id(url)
        task = self._tasks[task_id]
        if task_id not in self.open and task_id not in self.in_flight and task_id not in self.done:
            self.open[task_id] = task
        task.add_parent(parent_id)
        return task_id

    def enqueue_blacklisted(self, url: str, parent_id: int) -> int:
        task_id = self.get_or_create_id(url)
        task = self._tasks[task_id]
        if task_id not in self.blacklisted:
            self.blacklisted[task_id] = task
        task.add_parent(parent_id)
        return task_id

    def take_open(self) -> Optional[CrawlTask]:
        """Move the oldest open task to in-flight and return it."""
        if not self.open:
            return None
        task_id, task = self.open.popitem(last=False)
        self.in_flight[task_id] = task
        return task

    def mark_done(self, task: CrawlTask) -> None:
        self.in_flight.pop(task.id, None)
        self.done[task.id] = task

    def count_open(self) -> int:
        return len(self.open)

    def count_in_flight(self) -> int:
        return len(self.in_flight)

    def count_done(self) -> int:
        return len(self.done)

    def count_blacklisted(self) -> int:
        return len(self.blacklisted)

    def count_all(self) -> int:
        return len(self._tasks)

    def counts_for_limit(self) -> Tuple[int, int]:
        return len(self.in_flight), len(self.done)

    def all_tasks(self) -> List[CrawlTask]:
        """Every discovered task, fetched or not, ordered by id."""
        return [self._tasks[task_id] for task_id in sorted(self._tasks)]
