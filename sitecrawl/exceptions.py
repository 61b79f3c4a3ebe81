"""Custom exceptions for SiteCrawl."""


class InvalidSeedUrlError(Exception):
    """Raised when the seed URL has no scheme or no host."""

    def __init__(self, url: str, reason: str = "missing scheme or host"):
        self.url = url
        self.reason = reason
        super().__init__(f"invalid url: '{url}' ({reason})")


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")
