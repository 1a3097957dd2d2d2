"""In-memory implementation of FetcherPort for testing."""

from domain.model.errors import FetchError


class FakeFetcher:
    """Fake fetcher that serves preconfigured pages by URL."""

    def __init__(
        self,
        pages: dict[str, str] | None = None,
        default: str | None = None,
        errors: dict[str, FetchError] | None = None,
    ):
        self.pages = pages or {}
        self.default = default
        self.errors = errors or {}
        self.requested_urls: list[str] = []

    async def fetch(self, url: str) -> str:
        self.requested_urls.append(url)
        if url in self.errors:
            raise self.errors[url]
        if url in self.pages:
            return self.pages[url]
        if self.default is not None:
            return self.default
        raise FetchError("Request failed with status code 404", kind="not-found", url=url)
