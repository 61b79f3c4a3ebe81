from typing import Mapping, NamedTuple

# Status recorded when no HTTP response could be obtained at all.
TRANSPORT_FAILURE_STATUS = 500


class FetchResult(NamedTuple):
    """Outcome of a single GET, successful or not."""
    status_code: int
    headers: Mapping[str, str]
    body: str
    elapsed_ms: float

    @classmethod
    def transport_failure(cls, elapsed_ms: float) -> "FetchResult":
        return cls(TRANSPORT_FAILURE_STATUS, {}, "", elapsed_ms)
