"""Shared fixtures: local aiohttp stub servers."""

from contextlib import asynccontextmanager

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer


def duplicate_header_handler(content_type: str):
    """Handler answering 200 'hello' with X-Foo sent twice."""

    async def handler(request: web.Request) -> web.Response:
        response = web.Response(body=b"hello", content_type=content_type)
        response.headers.add("X-Foo", "a")
        response.headers.add("X-Foo", "b")
        return response

    return handler


async def echo_handler(request: web.Request) -> web.Response:
    """Handler echoing the received method, body and headers as JSON."""
    body = await request.read()
    return web.json_response(
        {
            "method": request.method,
            "body": body.decode("utf-8"),
            "headers": dict(request.headers),
        }
    )


@pytest.fixture
def stub_server():
    """
    Factory for a local HTTP server.

    Usage:
        async with stub_server(handler) as server:
            url = str(server.make_url("/ok"))
    """

    @asynccontextmanager
    async def start(handler, path: str = "/ok"):
        app = web.Application()
        app.router.add_route("*", path, handler)
        server = TestServer(app)
        await server.start_server()
        try:
            yield server
        finally:
            await server.close()

    return start
