import threading

from sitecrawl.domain.fetch_result import FetchResult
from sitecrawl.domain.task import CrawlTask
from sitecrawl.services.fetch_dispatcher import FetchDispatcher


class _RecordingListener:
    def __init__(self):
        self.completed = []
        self.threads = []

    def on_fetch_complete(self, task, result):
        self.completed.append((task, result))
        self.threads.append(threading.current_thread())


class _StaticFetcher:
    def fetch(self, url):
        return FetchResult(200, {"X-Url": url}, "body", 1.0)


class _BrokenFetcher:
    def fetch(self, url):
        raise RuntimeError("boom")


def test_completion_is_delivered_on_calling_thread():
    dispatcher = FetchDispatcher(_StaticFetcher(), max_workers=2)
    listener = _RecordingListener()
    task = CrawlTask(0, "http://h/")
    try:
        dispatcher.dispatch(task)
        assert dispatcher.deliver(listener, timeout=5)
    finally:
        dispatcher.shutdown()

    (got_task, result), = listener.completed
    assert got_task is task
    assert result.status_code == 200
    assert result.headers == {"X-Url": "http://h/"}
    assert listener.threads == [threading.current_thread()]


def test_unexpected_fetcher_error_becomes_500(caplog):
    dispatcher = FetchDispatcher(_BrokenFetcher(), max_workers=1)
    listener = _RecordingListener()
    try:
        dispatcher.dispatch(CrawlTask(0, "http://h/"))
        assert dispatcher.deliver(listener, timeout=5)
    finally:
        dispatcher.shutdown()

    _, result = listener.completed[0]
    assert result.status_code == 500
    assert result.body == ""
    assert "Unexpected fetch error for http://h/" in caplog.text


def test_deliver_times_out_when_nothing_completed():
    dispatcher = FetchDispatcher(_StaticFetcher(), max_workers=1)
    listener = _RecordingListener()
    try:
        assert dispatcher.deliver(listener, timeout=0.01) is False
    finally:
        dispatcher.shutdown()
    assert listener.completed == []
