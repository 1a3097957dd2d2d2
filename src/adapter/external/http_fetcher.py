"""HTTP page fetcher.

Implements FetcherPort with httpx. Transient failures are retried with
tenacity; when CORS-proxy mode is enabled for a host, each configured
proxy is tried in order until one returns the page.

Configuration is an immutable FetchConfig passed in at construction,
usually built from environment variables by FetchConfig.from_env().
"""

import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
from urllib.parse import quote, urlparse

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from domain.model.errors import FetchError
from utils.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_PROXY_TIMEOUT_SECONDS = 15.0
DEFAULT_REQUESTS_PER_SECOND = 1.0
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

DEFAULT_CORS_PROXIES: tuple[str, ...] = (
    "https://api.allorigins.win/get?url=",
    "https://corsproxy.io/?",
    "https://cors-anywhere.herokuapp.com/",
    "https://api.codetabs.com/v1/proxy?quest=",
)
PROXY_ACCEPT_HEADER = "application/json, text/plain, */*"


@dataclass(frozen=True)
class FetchConfig:
    """Immutable settings for HttpFetcher."""

    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    proxy_timeout_seconds: float = DEFAULT_PROXY_TIMEOUT_SECONDS
    headers: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({"User-Agent": DEFAULT_USER_AGENT})
    )
    use_cors_proxy: bool = False
    cors_proxies: tuple[str, ...] = DEFAULT_CORS_PROXIES
    proxied_hosts: tuple[str, ...] = ("linguee.com",)
    requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND

    def __post_init__(self) -> None:
        # Freeze mutable dict passed at construction time
        if isinstance(self.headers, dict):
            object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    @classmethod
    def from_env(cls) -> "FetchConfig":
        """Build a config from environment variables (unset → defaults)."""
        proxies = os.getenv("CORS_PROXY_URLS")
        return cls(
            timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)),
            proxy_timeout_seconds=float(
                os.getenv("PROXY_TIMEOUT_SECONDS", DEFAULT_PROXY_TIMEOUT_SECONDS)
            ),
            headers={"User-Agent": os.getenv("HTTP_USER_AGENT", DEFAULT_USER_AGENT)},
            use_cors_proxy=os.getenv("USE_CORS_PROXY", "false").lower() in ("1", "true", "yes"),
            cors_proxies=(
                tuple(p.strip() for p in proxies.split(",") if p.strip())
                if proxies else DEFAULT_CORS_PROXIES
            ),
            requests_per_second=float(
                os.getenv("REQUESTS_PER_SECOND", DEFAULT_REQUESTS_PER_SECOND)
            ),
        )

    def uses_proxy(self, url: str) -> bool:
        if not self.use_cors_proxy:
            return False
        host = urlparse(url).hostname or ""
        return any(host == h or host.endswith(f".{h}") for h in self.proxied_hosts)


class HttpFetcher:
    """Fetches page bodies over HTTP with retry, rate limit and proxy fallback."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or FetchConfig.from_env()
        self._transport = transport
        self._limiter = RateLimiter(self.config.requests_per_second)

    async def fetch(self, url: str) -> str:
        """Fetch a URL and return its body text.

        Raises:
            FetchError: On any transport failure or non-2xx status.
        """
        if self.config.uses_proxy(url):
            return await self._fetch_via_proxies(url)

        async with self._limiter:
            async with self._client(self.config.timeout_seconds) as client:
                try:
                    response = await _get_with_retry(client, url)
                    response.raise_for_status()
                except httpx.HTTPError as e:
                    raise to_fetch_error(e, url) from e
                return response.text

    async def _fetch_via_proxies(self, url: str) -> str:
        errors: list[str] = []
        for proxy in self.config.cors_proxies:
            proxy_url = f"{proxy}{quote(url, safe='')}"
            try:
                async with self._limiter:
                    async with self._client(
                        self.config.proxy_timeout_seconds,
                        headers={"Accept": PROXY_ACCEPT_HEADER},
                    ) as client:
                        response = await _get_with_retry(client, proxy_url)
                        response.raise_for_status()
            except httpx.HTTPError as e:
                errors.append(f"{proxy}: {str(e) or type(e).__name__}")
                logger.debug("CORS proxy failed", extra={"proxy": proxy, "url": url})
                continue

            content = unwrap_proxy_response(response)
            if content:
                return content
            errors.append(f"{proxy}: Invalid proxy response format")

        raise FetchError(
            f"All CORS proxies failed. Errors: {'; '.join(errors)}",
            kind="network",
            url=url,
        )

    def _client(self, timeout: float, headers: Mapping[str, str] | None = None) -> httpx.AsyncClient:
        merged = {**self.config.headers, **(headers or {})}
        return httpx.AsyncClient(
            timeout=timeout,
            headers=merged,
            follow_redirects=True,
            transport=self._transport,
        )


# ── HTTP helpers ─────────────────────────────────────────────


@retry(
    retry=retry_if_exception_type((httpx.TimeoutException, httpx.ConnectError)),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=4),
    reraise=True,
)
async def _get_with_retry(client: httpx.AsyncClient, url: str) -> httpx.Response:
    """Fetch URL with automatic retry on transient failures."""
    return await client.get(url)


def unwrap_proxy_response(response: httpx.Response) -> str | None:
    """Extract page HTML from a proxy reply.

    JSON proxies (allorigins) wrap the page in ``contents`` or ``data``;
    others return the page body directly.
    """
    text = response.text
    if "json" in response.headers.get("content-type", ""):
        try:
            payload = json.loads(text)
        except ValueError:
            return text or None
        if isinstance(payload, dict):
            content = payload.get("contents") or payload.get("data")
            return content if isinstance(content, str) and content else None
        return None
    return text or None


def to_fetch_error(error: httpx.HTTPError, url: str) -> FetchError:
    """Classify an httpx failure into a FetchError kind."""
    if isinstance(error, httpx.TimeoutException):
        return FetchError(f"Request timed out: {url}", kind="timeout", url=url)
    if isinstance(error, httpx.HTTPStatusError):
        status = error.response.status_code
        if status == 404:
            kind = "not-found"
        elif status == 429:
            kind = "rate-limit"
        elif status >= 500:
            kind = "server-error"
        else:
            kind = "unknown"
        return FetchError(f"Request failed with status code {status}", kind=kind, url=url)
    if isinstance(error, httpx.NetworkError):
        return FetchError(f"Network error: {str(error) or type(error).__name__}", kind="network", url=url)
    return FetchError(str(error) or type(error).__name__, kind="unknown", url=url)
