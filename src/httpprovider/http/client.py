"""Async HTTP fetcher sharing one session across requests."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from types import TracebackType
from typing import Optional

import aiohttp

from ..errors import TransportError
from ..models.config import DEFAULT_USER_AGENT
from ..models.request import RequestSpec

logger = logging.getLogger(__name__)

# Marks an omitted per-call timeout (None already means "no deadline")
USE_DEFAULT_TIMEOUT = object()


class HttpFetcher:
    """
    Executes one HTTP request per call over a shared aiohttp session.

    The session is created once when entering the async context and is
    reused by every request so connections can be pooled. The fetcher
    performs no retries and never reads the response body; the caller
    owns the response for the duration of the ``execute`` block and the
    connection is released when the block exits, on success or failure.

    Example:
        async with HttpFetcher(default_timeout=10.0) as fetcher:
            async with fetcher.execute(spec) as response:
                body = await response.read()
    """

    # Failures that mean the request never produced a response
    TRANSPORT_EXCEPTIONS = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
        ConnectionError,
        ValueError,
    )

    def __init__(
        self,
        default_timeout: Optional[float] = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = 10,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            default_timeout: Total deadline per request in seconds (None = no deadline)
            user_agent: Default User-Agent, overridable per request
            max_redirects: Maximum redirects followed per request
        """
        self._default_timeout = default_timeout
        self._user_agent = user_agent
        self._max_redirects = max_redirects
        self._session: aiohttp.ClientSession | None = None

    async def open(self) -> None:
        """Create the shared session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(headers={"User-Agent": self._user_agent})

    async def close(self) -> None:
        """Close the shared session."""
        if self._session:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> HttpFetcher:
        """Enter async context and create session."""
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        await self.close()

    @property
    def is_open(self) -> bool:
        return self._session is not None and not self._session.closed

    @asynccontextmanager
    async def execute(
        self,
        spec: RequestSpec,
        *,
        timeout: object = USE_DEFAULT_TIMEOUT,
    ) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Send the request described by ``spec`` and yield the raw response.

        Method and URL are used verbatim. The request body is attached
        whenever it is non-empty, regardless of method. Each entry of
        ``request_headers`` overwrites a session default of the same name.

        Args:
            spec: Validated request inputs
            timeout: Total deadline in seconds, None for no deadline
                (uses the fetcher default when omitted)

        Yields:
            The unread aiohttp response

        Raises:
            TransportError: If the request cannot be built or sent, or no
                response arrives before the deadline
        """
        if self._session is None:
            raise RuntimeError("Fetcher not initialized. Use 'async with' context manager.")

        deadline = self._default_timeout if timeout is USE_DEFAULT_TIMEOUT else timeout
        data = spec.request_body.encode("utf-8") if spec.request_body else None

        logger.debug(f"{spec.method} {spec.url} (timeout={deadline})")

        try:
            response = await self._session.request(
                spec.method,
                spec.url,
                headers=spec.request_headers or None,
                data=data,
                # No implicit Content-Type for the raw body
                skip_auto_headers=("Content-Type",) if data is not None else None,
                timeout=aiohttp.ClientTimeout(total=deadline),
                allow_redirects=True,
                max_redirects=self._max_redirects,
            )
        except asyncio.TimeoutError as e:
            raise TransportError(
                "Error making request",
                f"{spec.method} {spec.url}: no response within {deadline}s",
            ) from e
        except self.TRANSPORT_EXCEPTIONS as e:
            raise TransportError("Error making request", f"{spec.method} {spec.url}: {e}") from e

        try:
            yield response
        finally:
            response.release()
