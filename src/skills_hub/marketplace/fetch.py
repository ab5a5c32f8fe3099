"""Bounded HTTP retrieval: the only code that talks to the remote host."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import httpx

from skills_hub.core.exceptions import FetchError, FetchTimeoutError, ResponseTooLargeError
from skills_hub.core.logging.logger import get_logger

logger = get_logger(__name__)

FETCH_TIMEOUT_SECONDS = 10.0
MAX_RESPONSE_BYTES = 1_048_576
MAX_RULES = 50


@dataclass(frozen=True)
class FetchedResponse:
    url: str
    status_code: int
    content: bytes

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """The body as UTF-8; undecodable bytes raise :class:`FetchError`."""
        try:
            return self.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError(f"Response is not valid UTF-8: {self.url}", self.url) from exc


class BoundedFetcher:
    """Fetch URLs with a whole-request timeout and a response size cap.

    No retries are performed. Non-2xx responses are returned to the caller,
    which decides whether the resource was required.
    """

    def __init__(
        self,
        *,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        max_bytes: int = MAX_RESPONSE_BYTES,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout = timeout
        self.max_bytes = max_bytes
        self._transport = transport

    async def fetch(self, url: str) -> FetchedResponse:
        try:
            async with asyncio.timeout(self.timeout):
                return await self._fetch(url)
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise FetchTimeoutError(url, self.timeout) from exc
        except httpx.InvalidURL as exc:
            raise FetchError(f"Invalid URL: {url}", url) from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Request failed: {url} ({exc})", url) from exc

    async def _fetch(self, url: str) -> FetchedResponse:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
            follow_redirects=False,
        ) as client:
            async with client.stream("GET", url) as response:
                self._check_declared_size(response, url)
                content = await self._read_bounded(response, url)
        logger.debug(
            "Fetched",
            data={"url": url, "status": response.status_code, "bytes": len(content)},
        )
        return FetchedResponse(url=url, status_code=response.status_code, content=content)

    def _check_declared_size(self, response: httpx.Response, url: str) -> None:
        declared = response.headers.get("content-length")
        if not declared:
            return
        try:
            size = int(declared)
        except ValueError:
            return
        if size > self.max_bytes:
            raise ResponseTooLargeError(url, size, self.max_bytes)

    async def _read_bounded(self, response: httpx.Response, url: str) -> bytes:
        chunks: list[bytes] = []
        total = 0
        async for chunk in response.aiter_bytes():
            total += len(chunk)
            if total > self.max_bytes:
                raise ResponseTooLargeError(url, total, self.max_bytes)
            chunks.append(chunk)
        return b"".join(chunks)
