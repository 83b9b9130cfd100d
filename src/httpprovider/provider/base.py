"""Behaviour shared by the http data source and resource."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from ..errors import ProviderError
from ..models.diagnostics import Diagnostics
from .schema import HTTP_SCHEMA, Schema
from .state import OperationResponse, build_state, spec_from_config

if TYPE_CHECKING:
    from .provider import HttpProvider

logger = logging.getLogger(__name__)


class HttpObject:
    """Base for objects backed by a single FetchOperation."""

    type_name = "http"

    def __init__(self, provider: HttpProvider) -> None:
        self._provider = provider

    def schema(self) -> Schema:
        return HTTP_SCHEMA

    def validate_config(self, config: Any) -> Diagnostics:
        """Validate user configuration without making any request."""
        diags = HTTP_SCHEMA.validate_config(config)
        if not diags.has_error():
            try:
                spec_from_config(config)
            except ProviderError as e:
                diags.append(e.to_diagnostic())
        return diags

    async def _fetch(self, config: Mapping[str, Any], *, force_get: bool = False) -> OperationResponse:
        response = OperationResponse()
        try:
            spec = spec_from_config(config)
            operation = await self._provider.get_operation()
            result = await operation.run(spec, response.diagnostics, force_get=force_get)
        except ProviderError as e:
            response.diagnostics.append(e.to_diagnostic())
            return response

        response.state = build_state(config, result)
        return response
