"""FetchOperation - one idempotent fetch shared by data source and resource."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from ..errors import BodyReadError, ProviderError
from ..http.client import USE_DEFAULT_TIMEOUT, HttpFetcher
from ..http.content_type import Classification, ContentClassifier
from ..http.headers import fold_headers
from ..models.config import ProviderConfig
from ..models.diagnostics import Diagnostics
from ..models.request import DEFAULT_METHOD, RequestSpec
from ..models.result import FetchResult

logger = logging.getLogger(__name__)

CONTENT_TYPE_WARNING_DETAIL = (
    "If the content is binary data, the host may not properly handle the contents of the response."
)


def content_type_warning_summary(content_type: str) -> str:
    return f'Content-Type is not recognized as a text type, got "{content_type}"'


def decode_body(content: bytes, classification: Classification) -> str:
    """
    Decode a response body to text.

    Uses the declared charset when it names a known text codec,
    otherwise UTF-8. Undecodable bytes are replaced rather than rejected
    so that binary bodies are still captured.

    Args:
        content: Raw body bytes
        classification: Classification of the response Content-Type

    Returns:
        Decoded body
    """
    charset = classification.params.get("charset")
    if charset:
        try:
            return content.decode(charset, errors="replace")
        except LookupError:
            # Unknown names and non-text codecs such as base64
            logger.debug(f"Unusable charset {charset!r}, decoding as utf-8")
    return content.decode("utf-8", errors="replace")


class FetchOperation:
    """
    Runs a RequestSpec through the fetcher and normalizes the response.

    Steps:
        1. Default an empty method to GET
        2. Execute the request over the shared fetcher
        3. Classify the Content-Type (non-text adds a warning only)
        4. Read the entire body
        5. Fold the response headers
        6. Build a FetchResult whose identity is the requested URL

    Any failure raises a ProviderError subclass and no result is
    produced. Warnings go to the diagnostics sink passed to ``run``.

    Example:
        async with HttpFetcher() as fetcher:
            operation = FetchOperation(fetcher)
            diags = Diagnostics()
            result = await operation.run(spec, diags)
    """

    def __init__(
        self,
        fetcher: HttpFetcher,
        classifier: Optional[ContentClassifier] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        """
        Initialize the operation.

        Args:
            fetcher: Open fetcher whose session is shared between runs
            classifier: Content classifier (default: ContentClassifier())
            logger: Logger receiving progress messages
        """
        self._fetcher = fetcher
        self._classifier = classifier or ContentClassifier()
        self._logger = logger or logging.getLogger(__name__)

    async def run(
        self,
        spec: RequestSpec,
        diagnostics: Optional[Diagnostics] = None,
        *,
        force_get: bool = False,
        timeout: object = USE_DEFAULT_TIMEOUT,
    ) -> FetchResult:
        """
        Execute one fetch.

        Args:
            spec: Request inputs
            diagnostics: Sink for warnings raised during the fetch
            force_get: Send GET whatever method the spec declares
            timeout: Per-call deadline in seconds, None for no deadline
                (uses the fetcher default when omitted)

        Returns:
            FetchResult for this execution

        Raises:
            TransportError: Request could not be sent or timed out
            BodyReadError: Response body could not be read
        """
        if diagnostics is None:
            diagnostics = Diagnostics()

        if force_get and spec.method != DEFAULT_METHOD:
            self._logger.debug(f"Refreshing {spec.url} with GET instead of {spec.method}")
            spec = spec.with_method(DEFAULT_METHOD)
        elif not spec.method:
            spec = spec.with_method(DEFAULT_METHOD)

        try:
            async with self._fetcher.execute(spec, timeout=timeout) as response:
                content_type = response.headers.get("Content-Type", "")
                classification = self._classifier.classify(content_type)
                if not classification.is_text:
                    self._logger.warning(f"Non-text Content-Type {content_type!r} for {spec.url}")
                    diagnostics.add_warning(
                        content_type_warning_summary(content_type),
                        CONTENT_TYPE_WARNING_DETAIL,
                    )

                try:
                    content = await response.read()
                except (aiohttp.ClientError, asyncio.TimeoutError, ConnectionError) as e:
                    raise BodyReadError("Error reading response body", f"{spec.url}: {e}") from e

                result = FetchResult(
                    identity=spec.url,
                    status_code=response.status,
                    response_headers=fold_headers(response.headers),
                    response_body=decode_body(content, classification),
                )
        except ProviderError as e:
            self._logger.error(f"Fetch of {spec.url} failed: {e}")
            raise

        self._logger.debug(f"{spec.method} {spec.url} -> {result.status_code} ({len(content)} bytes)")
        return result


def fetch_blocking(
    spec: RequestSpec,
    config: Optional[ProviderConfig] = None,
    diagnostics: Optional[Diagnostics] = None,
) -> FetchResult:
    """
    Blocking fetch for synchronous callers.

    Opens a fetcher, runs one FetchOperation and closes the fetcher.

    WARNING: Do not call from within an existing event loop. Use
    FetchOperation with an HttpFetcher instead.

    Args:
        spec: Request inputs
        config: Provider configuration (timeout, user agent, redirects)
        diagnostics: Sink for warnings

    Returns:
        FetchResult for this execution

    Example:
        diags = Diagnostics()
        result = fetch_blocking(RequestSpec(url="https://example.com"), diagnostics=diags)
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        pass
    else:
        raise RuntimeError("fetch_blocking() called from async context. Use FetchOperation instead.")

    config = config or ProviderConfig()

    async def run() -> FetchResult:
        async with HttpFetcher(
            default_timeout=config.timeout,
            user_agent=config.user_agent,
            max_redirects=config.max_redirects,
        ) as fetcher:
            return await FetchOperation(fetcher).run(spec, diagnostics)

    return asyncio.run(run())
