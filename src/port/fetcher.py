"""Port definition for page fetching."""

from typing import Protocol


class FetcherPort(Protocol):
    """Retrieves the raw body of a URL.

    Retry, proxy and rate-limit strategy belong to the implementation.
    Failures are raised as ``domain.model.errors.FetchError``.
    """

    async def fetch(self, url: str) -> str: ...
