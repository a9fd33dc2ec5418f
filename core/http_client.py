"""
Async HTTP Probe Client
Sends one GET per (target, origin) pair over a shared httpx transport.
"""

import asyncio
import random
import time
from dataclasses import dataclass
from urllib.parse import urlsplit

import httpx

from config import ScanConfig

from .errors import NetworkError
from .models import RandomSource

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/42.0.2311.135 Safari/537.36 Edge/12.246",
    "Mozilla/5.0 (Windows NT 10.0; WOW64; rv:40.0) Gecko/20100101 Firefox/43.0",
    "Mozilla/5.0 (Windows NT 6.1; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/63.0.3239.84 Safari/537.36",
    "Mozilla/5.0 (X11; Linux i686; rv:30.0) Gecko/20100101 Firefox/42.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_10_2) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/40.0.2214.38 Safari/537.36",
    "Mozilla/4.0 (compatible; MSIE 6.0; Windows NT 5.0)",
]


@dataclass
class HTTPResponse:
    """Status and headers of a probe response"""
    url: str
    status_code: int
    headers: httpx.Headers
    elapsed: float


def parse_cookie_string(cookies: str) -> list[tuple[str, str]]:
    """Split 'a=1; b=x=y' into [('a', '1'), ('b', 'x=y')]"""
    pairs = []
    for pair in cookies.split(";"):
        name, sep, value = pair.strip().partition("=")
        if sep:
            pairs.append((name, value))
    return pairs


def cookie_header(target: str, rules: list[tuple[str, str]]) -> str | None:
    """Cookie header for the target, from every rule whose domain is in its host"""
    try:
        host = urlsplit(target).netloc.rpartition("@")[2]
    except ValueError:
        return None
    if not host:
        return None

    pairs = []
    for domain, cookies in rules:
        if domain and domain in host:
            pairs.extend(parse_cookie_string(cookies))
    if not pairs:
        return None
    return "; ".join(f"{name}={value}" for name, value in pairs)


class ProbeClient:
    """
    HTTP client for CORS probes.

    Features:
    - One pooled httpx transport per scan
    - TLS verification disabled for self-signed targets
    - Optional proxy for every request
    - Whole round trip bounded by the scan timeout
    """

    def __init__(
        self,
        config: ScanConfig,
        rng: RandomSource | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config
        self.timeout = config.timeout
        self.rng = rng or random.Random()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create async client"""
        if self._client is None:
            limits = httpx.Limits(
                max_connections=max(self.config.threads, 10),
                max_keepalive_connections=20,
            )
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=limits,
                verify=False,
                follow_redirects=False,
                proxy=self.config.proxy_url if self._transport is None else None,
                transport=self._transport,
                trust_env=False,
            )
        return self._client

    def build_headers(self, target: str, origin: str) -> dict[str, str]:
        """Request headers for one probe"""
        headers = {
            "User-Agent": self.config.user_agent or self.rng.choice(USER_AGENTS),
            "Origin": origin,
        }
        if self.config.referer:
            headers["Referer"] = self.config.referer
        if self.config.custom_header:
            name, value = self.config.custom_header
            headers[name] = value

        cookies = cookie_header(target, self.config.cookies)
        if cookies:
            headers["Cookie"] = cookies
        return headers

    async def probe(self, target: str, origin: str) -> HTTPResponse:
        """
        Send a GET to target with the given Origin.

        Raises:
            NetworkError: on any transport failure, including timeout
        """
        client = self._get_client()
        headers = self.build_headers(target, origin)

        try:
            start = time.time()
            response = await asyncio.wait_for(
                client.get(target, headers=headers),
                timeout=self.timeout,
            )
            elapsed = time.time() - start
        except asyncio.TimeoutError as e:
            raise NetworkError(target, origin, f"timed out after {self.timeout}s") from e
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            raise NetworkError(target, origin, e) from e

        return HTTPResponse(
            url=str(response.url),
            status_code=response.status_code,
            headers=response.headers,
            elapsed=elapsed,
        )

    async def close(self):
        """Close the client connections"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ProbeClient":
        self._get_client()
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()
