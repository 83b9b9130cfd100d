"""Newline-delimited JSON request/response loop for the orchestration host."""

from __future__ import annotations

import asyncio
import json
import logging
import os
import sys
from typing import Any, Awaitable, Callable, Optional, TextIO, TypeVar

from .models.diagnostics import Diagnostics
from .provider import HttpProvider

logger = logging.getLogger(__name__)

T = TypeVar("T")
Handler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


def _diagnostics_result(diags: Diagnostics) -> dict[str, Any]:
    return {"diagnostics": diags.to_list()}


def _error_result(summary: str, detail: str = "") -> dict[str, Any]:
    diags = Diagnostics()
    diags.add_error(summary, detail)
    return _diagnostics_result(diags)


class ProviderServer:
    """
    Serves an HttpProvider over line-delimited JSON.

    Every request line ``{"id": ..., "method": ..., "params": {...}}``
    gets exactly one response line ``{"id": ..., "result": {...}}``.
    Requests are handled one at a time in arrival order. Malformed lines
    and unknown methods produce error diagnostics and do not stop the
    server, nor does an unexpected failure inside a handler; ``StopProvider`` or end of input does.

    Example:
        async with HttpProvider() as provider:
            server = ProviderServer(provider, sys.stdin, sys.stdout)
            await server.serve()
    """

    def __init__(self, provider: HttpProvider, reader: TextIO, writer: TextIO) -> None:
        self._provider = provider
        self._reader = reader
        self._writer = writer
        self._stopped = False
        self._handlers: dict[str, Handler] = {
            "GetProviderSchema": self._get_provider_schema,
            "ConfigureProvider": self._configure_provider,
            "ValidateDataSourceConfig": self._validate_data_source_config,
            "ReadDataSource": self._read_data_source,
            "ValidateResourceConfig": self._validate_resource_config,
            "CreateResource": self._create_resource,
            "ReadResource": self._read_resource,
            "UpdateResource": self._update_resource,
            "DeleteResource": self._delete_resource,
            "StopProvider": self._stop_provider,
        }

    async def serve(self) -> None:
        """Process requests until StopProvider or end of input."""
        logger.debug("Serving provider protocol")
        while not self._stopped:
            line = await asyncio.to_thread(self._reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            response = await self.handle_line(line)
            self._writer.write(json.dumps(response) + "\n")
            self._writer.flush()
        logger.debug("Provider server stopped")

    async def handle_line(self, line: str) -> dict[str, Any]:
        """Decode one request line and return its response object."""
        try:
            request = json.loads(line)
        except json.JSONDecodeError as e:
            return {"id": None, "result": _error_result("Malformed request", str(e))}

        if not isinstance(request, dict):
            return {"id": None, "result": _error_result("Malformed request", "Expected a JSON object")}

        request_id = request.get("id")
        method = request.get("method")
        params = request.get("params") or {}

        handler = self._handlers.get(method) if isinstance(method, str) else None
        if handler is None:
            return {"id": request_id, "result": _error_result("Unknown method", f"{method!r} is not supported")}
        if not isinstance(params, dict):
            return {"id": request_id, "result": _error_result("Malformed request", "params must be an object")}

        logger.debug(f"Handling {method} (id={request_id})")
        try:
            result = await handler(params)
        except Exception as e:
            logger.exception(f"{method} (id={request_id}) failed")
            return {"id": request_id, "result": _error_result("Internal error", str(e))}
        return {"id": request_id, "result": result}

    def _lookup(self, params: dict[str, Any], known: dict[str, T]) -> tuple[Optional[T], Optional[dict[str, Any]]]:
        type_name = params.get("type_name", self._provider.type_name)
        if type_name not in known:
            return None, _error_result("Unknown type", f"{type_name!r} is not provided by this provider")
        return known[type_name], None

    async def _get_provider_schema(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"schema": self._provider.full_schema(), "diagnostics": []}

    async def _configure_provider(self, params: dict[str, Any]) -> dict[str, Any]:
        return _diagnostics_result(await self._provider.configure(params.get("config")))

    async def _validate_data_source_config(self, params: dict[str, Any]) -> dict[str, Any]:
        data_source, error = self._lookup(params, self._provider.data_sources())
        if data_source is None:
            return error
        return _diagnostics_result(data_source.validate_config(params.get("config")))

    async def _read_data_source(self, params: dict[str, Any]) -> dict[str, Any]:
        data_source, error = self._lookup(params, self._provider.data_sources())
        if data_source is None:
            return error
        return (await data_source.read(params.get("config"))).to_dict()

    async def _validate_resource_config(self, params: dict[str, Any]) -> dict[str, Any]:
        resource, error = self._lookup(params, self._provider.resources())
        if resource is None:
            return error
        return _diagnostics_result(resource.validate_config(params.get("config")))

    async def _create_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        resource, error = self._lookup(params, self._provider.resources())
        if resource is None:
            return error
        return (await resource.create(params.get("config"))).to_dict()

    async def _read_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        resource, error = self._lookup(params, self._provider.resources())
        if resource is None:
            return error
        return (await resource.read(params.get("state"))).to_dict()

    async def _update_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        resource, error = self._lookup(params, self._provider.resources())
        if resource is None:
            return error
        return (await resource.update(params.get("prior_state"), params.get("config"))).to_dict()

    async def _delete_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        resource, error = self._lookup(params, self._provider.resources())
        if resource is None:
            return error
        return (await resource.delete(params.get("state"))).to_dict()

    async def _stop_provider(self, params: dict[str, Any]) -> dict[str, Any]:
        self._stopped = True
        return {"diagnostics": []}


def reattach_line() -> str:
    """Line printed in debug mode so a debugger or host can attach."""
    return "HTTPPROVIDER_REATTACH=" + json.dumps({"pid": os.getpid(), "protocol": "jsonl"})


async def serve(
    provider: HttpProvider,
    reader: Optional[TextIO] = None,
    writer: Optional[TextIO] = None,
    debug: bool = False,
) -> None:
    """
    Serve ``provider`` until the host stops it.

    Args:
        provider: Provider to expose
        reader: Stream carrying request lines (default: stdin)
        writer: Stream receiving response lines (default: stdout)
        debug: Announce the process for debugger attachment on stderr
    """
    if debug:
        print(reattach_line(), file=sys.stderr, flush=True)

    if reader is None:
        reader = sys.stdin
    if writer is None:
        writer = sys.stdout

    async with provider:
        await ProviderServer(provider, reader, writer).serve()
