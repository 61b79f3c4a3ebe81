import re
from typing import Iterable, Mapping, NamedTuple, Optional, Tuple, Union

_MAX_AGE_RE = re.compile(r"max-age=(\d+)")

Headers = Union[Mapping[str, str], Iterable[Tuple[str, str]]]


class CacheControl(NamedTuple):
    cacheable: bool = True
    max_age: int = -1


def _header_items(headers: Optional[Headers]):
    if headers is None:
        return ()
    if isinstance(headers, Mapping):
        return headers.items()
    return headers


def read_cache_control(headers: Optional[Headers]) -> CacheControl:
    """Summarize `cache-control` headers for reporting.

    Any `no-cache`/`no-store` directive makes the response non-cacheable.
    `max_age` is the first `max-age=<digits>` seen, or -1.
    """
    cacheable = True
    max_age = -1
    for name, value in _header_items(headers):
        if name.lower() != "cache-control":
            continue
        if "no-cache" in value or "no-store" in value:
            cacheable = False
        if max_age == -1:
            match = _MAX_AGE_RE.search(value)
            if match:
                max_age = int(match.group(1))
    return CacheControl(cacheable=cacheable, max_age=max_age)
