from typing import Optional

import requests
import urllib3
from requests.adapters import HTTPAdapter

from sitecrawl.exceptions import HttpFetchError

# Certificates are never validated, so the per-request warning is noise.
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

# Matches the largest default ThreadPoolExecutor size.
DEFAULT_POOL_SIZE = 32


def build_session(user_agent: str, pool_size: Optional[int] = None) -> requests.Session:
    """Create the one Session shared by every fetch of a run.

    Default headers are replaced so the only negotiation sent is
    `Accept: */*` plus the product string.
    """
    size = pool_size or DEFAULT_POOL_SIZE
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=size, pool_maxsize=size)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.clear()
    session.headers.update({"User-Agent": user_agent, "Accept": "*/*"})
    session.verify = False
    return session


class HttpService:
    """
    HTTP client wrapper for fetching web pages.

    Takes the session to send requests through, so every fetch shares one
    connection pool and tests can pass a mock instead of patching.
    """

    def __init__(self, session: requests.Session, timeout: Optional[int] = None):
        self.session = session
        self.timeout = timeout

    def fetch(self, url: str) -> requests.Response:
        """GET `url`; any HTTP status is returned, transport failures raise."""
        try:
            return self.session.get(url, timeout=self.timeout, verify=False)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e
