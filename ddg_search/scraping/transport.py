"""HTTP transport for fetching results pages."""

import asyncio
from typing import Any, Awaitable, Mapping, Protocol, TypeVar

import httpx

from ddg_search.core.config import settings
from ddg_search.monitoring.logger import get_logger
from ddg_search.scraping.errors import HttpError, RequestError, SearchCancelledError

logger = get_logger(__name__)

T = TypeVar("T")


class CancellationToken:
    """Cooperative cancellation shared between a caller and the transport."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Safe to call more than once."""
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise SearchCancelledError if cancellation was requested."""
        if self.cancelled:
            raise SearchCancelledError()

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        Args:
            awaitable: Operation to run

        Returns:
            Result of the operation

        Raises:
            SearchCancelledError: If cancelled before the operation finished
        """
        if self.cancelled:
            # never started, so close it rather than leave it unawaited
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            raise SearchCancelledError()

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)

        if task in done:
            return task.result()
        raise SearchCancelledError()


class Transport(Protocol):
    """Anything that can fetch one results page."""

    async def fetch(
        self,
        url: str,
        data: Mapping[str, str] | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> str: ...


class HttpTransport:
    """Fetch pages over HTTP with httpx.

    A request without ``data`` is a GET; with ``data`` it is a
    form-encoded POST. Both carry the configured User-Agent.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        user_agent: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize transport.

        Args:
            client: Shared AsyncClient (a client per request if None)
            user_agent: User-Agent header value
            timeout: Request timeout in seconds
        """
        self._client = client
        self.user_agent = user_agent or settings.user_agent
        self.timeout = timeout or settings.request_timeout

    async def fetch(
        self,
        url: str,
        data: Mapping[str, str] | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> str:
        """Fetch one page and return its body.

        Args:
            url: Request URL
            data: Form fields to POST (GET when None)
            cancel_token: Optional cancellation token

        Returns:
            Response text

        Raises:
            HttpError: On a non-success status
            RequestError: On a network-level failure
            SearchCancelledError: If the token fires before or during the request
        """
        if cancel_token is None:
            return await self._request(url, data)
        cancel_token.raise_if_cancelled()
        return await cancel_token.run(self._request(url, data))

    async def _request(self, url: str, data: Mapping[str, str] | None) -> str:
        method = "GET" if data is None else "POST"
        logger.debug(f"{method} {url}")

        try:
            if self._client is not None:
                response = await self._send(self._client, url, data)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._send(client, url, data)
        except httpx.HTTPError as e:
            raise RequestError(f"Request failed: {e}") from e

        if not response.is_success:
            raise HttpError(response.status_code, response.reason_phrase)
        return response.text

    async def _send(
        self,
        client: httpx.AsyncClient,
        url: str,
        data: Mapping[str, str] | None,
    ) -> httpx.Response:
        headers: dict[str, Any] = {"User-Agent": self.user_agent}
        if data is None:
            return await client.get(url, headers=headers)
        # httpx sets the form Content-Type for dict bodies
        return await client.post(url, data=dict(data), headers=headers)
