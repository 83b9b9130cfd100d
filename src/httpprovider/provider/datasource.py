"""HttpDataSource - read-only query primitive."""

from __future__ import annotations

from typing import Any

from .base import HttpObject
from .state import OperationResponse


class HttpDataSource(HttpObject):
    """
    Data source that re-fetches its URL on every read.

    Example:
        async with HttpProvider() as provider:
            response = await provider.data_sources()["http"].read({"url": "https://example.com"})
            print(response.state["status_code"])
    """

    async def read(self, config: Any) -> OperationResponse:
        """
        Fetch the configured URL and return the resulting state.

        Args:
            config: User configuration (url, method, request_headers, request_body)

        Returns:
            OperationResponse with the new state, or error diagnostics
        """
        diags = self.validate_config(config)
        if diags.has_error():
            return OperationResponse(diagnostics=diags)

        response = await self._fetch(config)
        diags.extend(response.diagnostics)
        response.diagnostics = diags
        return response
