"""HttpResource - managed-resource primitive."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .base import HttpObject
from .state import OperationResponse, State

logger = logging.getLogger(__name__)


class HttpResource(HttpObject):
    """
    Managed resource whose create and read perform the request.

    Refreshing a resource always sends GET, even when it was created with
    POST or HEAD. Drift detection therefore never observes POST-specific
    responses; this matches the behaviour existing state depends on.
    Update and delete never contact the endpoint.
    """

    async def create(self, config: Any) -> OperationResponse:
        """Fetch the configured URL and return the initial state."""
        diags = self.validate_config(config)
        if diags.has_error():
            return OperationResponse(diagnostics=diags)

        response = await self._fetch(config)
        diags.extend(response.diagnostics)
        response.diagnostics = diags
        return response

    async def read(self, state: Optional[State]) -> OperationResponse:
        """
        Refresh a stored resource with a GET request.

        Args:
            state: Previously stored state (None if the resource is gone)

        Returns:
            OperationResponse with the replacement state
        """
        if state is None:
            return OperationResponse()
        return await self._fetch(state, force_get=True)

    async def update(self, prior_state: Optional[State], config: Any) -> OperationResponse:
        """Keep the prior state; updates send no request."""
        logger.debug("Update is a no-op for http resources")
        return OperationResponse(state=prior_state)

    async def delete(self, state: Optional[State]) -> OperationResponse:
        """Forget the resource; nothing is sent to the endpoint."""
        return OperationResponse(state=None)
