"""HttpProvider - entry point the orchestration host talks to."""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Any, Optional

import pydantic

from ..core.operation import FetchOperation
from ..http.client import HttpFetcher
from ..models.config import ProviderConfig
from ..models.diagnostics import Diagnostics
from .datasource import HttpDataSource
from .resource import HttpResource


class HttpProvider:
    """
    Provider exposing the ``http`` data source and resource.

    All objects share one HttpFetcher, opened on first use and closed
    when the provider's async context exits or the provider is
    reconfigured.

    Example:
        async with HttpProvider(ProviderConfig(timeout=5.0)) as provider:
            data_source = provider.data_sources()["http"]
            response = await data_source.read({"url": "https://example.com"})
    """

    type_name = "http"

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config or ProviderConfig()
        self.configured = False
        self._logger = logger or logging.getLogger(__name__)
        self._fetcher: Optional[HttpFetcher] = None
        self._operation: Optional[FetchOperation] = None
        self._data_sources = {"http": HttpDataSource(self)}
        self._resources = {"http": HttpResource(self)}

    async def __aenter__(self) -> HttpProvider:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the shared fetcher, if open."""
        if self._fetcher is not None:
            await self._fetcher.close()
            self._fetcher = None
            self._operation = None

    async def configure(self, data: Optional[dict[str, Any]] = None) -> Diagnostics:
        """
        Apply host-supplied provider configuration.

        Args:
            data: Provider block values (ProviderConfig fields)

        Returns:
            Diagnostics; the previous configuration is kept on error
        """
        diags = Diagnostics()
        try:
            config = ProviderConfig.model_validate(data or {})
        except pydantic.ValidationError as e:
            for error in e.errors():
                attribute = ".".join(str(part) for part in error["loc"]) or None
                diags.add_error("Invalid provider configuration", error["msg"], attribute=attribute)
            self._logger.debug("Provider configuration rejected")
            return diags

        await self.close()
        self.config = config
        self.configured = True
        self._logger.debug(f"Provider configured: {config.model_dump(mode='json')}")
        return diags

    async def get_operation(self) -> FetchOperation:
        """Return the shared FetchOperation, opening the fetcher if needed."""
        if self._operation is None:
            fetcher = HttpFetcher(
                default_timeout=self.config.timeout,
                user_agent=self.config.user_agent,
                max_redirects=self.config.max_redirects,
            )
            await fetcher.open()
            self._fetcher = fetcher
            self._operation = FetchOperation(fetcher, logger=self._logger)
        return self._operation

    def schema(self) -> dict[str, Any]:
        """Provider block schema (the ProviderConfig fields)."""
        return ProviderConfig.model_json_schema()

    def data_sources(self) -> dict[str, HttpDataSource]:
        return dict(self._data_sources)

    def resources(self) -> dict[str, HttpResource]:
        return dict(self._resources)

    def full_schema(self) -> dict[str, Any]:
        """Schemas of the provider block and of every object kind."""
        return {
            "provider": self.schema(),
            "data_sources": {name: ds.schema().to_dict() for name, ds in self._data_sources.items()},
            "resources": {name: res.schema().to_dict() for name, res in self._resources.items()},
        }
