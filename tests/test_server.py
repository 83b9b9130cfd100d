"""Tests for the line-delimited JSON provider server."""

import io
import json
from unittest.mock import AsyncMock, patch

import pytest
from aiohttp import web
from conftest import duplicate_header_handler
from httpprovider.provider import HttpDataSource, HttpProvider
from httpprovider.server import ProviderServer, reattach_line, serve


def make_server(provider=None, lines=()):
    reader = io.StringIO("".join(json.dumps(line) + "\n" for line in lines))
    writer = io.StringIO()
    return ProviderServer(provider or HttpProvider(), reader, writer), writer


def read_responses(writer):
    return [json.loads(line) for line in writer.getvalue().splitlines()]


class TestHandleLine:
    """Tests for ProviderServer.handle_line."""

    @pytest.mark.asyncio
    async def test_get_provider_schema(self):
        """Test schema negotiation."""
        server, _ = make_server()
        response = await server.handle_line(json.dumps({"id": 1, "method": "GetProviderSchema"}))
        assert response["id"] == 1
        assert "url" in response["result"]["schema"]["data_sources"]["http"]["attributes"]

    @pytest.mark.asyncio
    async def test_malformed_json(self):
        """Test that malformed JSON yields an error diagnostic."""
        server, _ = make_server()
        response = await server.handle_line("{not json")
        assert response["id"] is None
        assert response["result"]["diagnostics"][0]["summary"] == "Malformed request"

    @pytest.mark.asyncio
    async def test_unknown_method(self):
        """Test that unknown RPCs yield an error diagnostic."""
        server, _ = make_server()
        response = await server.handle_line(json.dumps({"id": 2, "method": "ImportResourceState"}))
        assert response["id"] == 2
        assert response["result"]["diagnostics"][0]["summary"] == "Unknown method"

    @pytest.mark.asyncio
    async def test_unknown_type_name(self):
        """Test that unknown object kinds are rejected."""
        server, _ = make_server()
        response = await server.handle_line(
            json.dumps({"id": 3, "method": "ReadDataSource", "params": {"type_name": "ftp", "config": {}}})
        )
        assert response["result"]["diagnostics"][0]["summary"] == "Unknown type"

    @pytest.mark.asyncio
    async def test_validate_data_source_config(self):
        """Test config validation without a request."""
        server, _ = make_server()
        response = await server.handle_line(
            json.dumps(
                {
                    "id": 4,
                    "method": "ValidateDataSourceConfig",
                    "params": {"config": {"url": "https://example.com", "method": "PATCH"}},
                }
            )
        )
        diagnostics = response["result"]["diagnostics"]
        assert diagnostics[0]["severity"] == "error"
        assert diagnostics[0]["attribute"] == "method"

    @pytest.mark.asyncio
    async def test_configure_provider(self):
        """Test provider configuration over the protocol."""
        provider = HttpProvider()
        server, _ = make_server(provider)
        response = await server.handle_line(
            json.dumps({"id": 5, "method": "ConfigureProvider", "params": {"config": {"timeout": 2}}})
        )
        assert response["result"]["diagnostics"] == []
        assert provider.config.timeout == 2

    @pytest.mark.asyncio
    async def test_read_data_source(self, stub_server):
        """Test a full data source read over the protocol."""
        async with stub_server(duplicate_header_handler("text/plain")) as http_server:
            url = str(http_server.make_url("/ok"))
            async with HttpProvider() as provider:
                server, _ = make_server(provider)
                response = await server.handle_line(
                    json.dumps({"id": 6, "method": "ReadDataSource", "params": {"config": {"url": url}}})
                )

        state = response["result"]["state"]
        assert state["id"] == url
        assert state["response_headers"]["X-Foo"] == "a, b"
        assert response["result"]["diagnostics"] == []

    @pytest.mark.asyncio
    async def test_delete_resource(self):
        """Test that delete clears state."""
        server, _ = make_server()
        response = await server.handle_line(
            json.dumps({"id": 7, "method": "DeleteResource", "params": {"state": {"id": "https://example.com"}}})
        )
        assert response["result"] == {"state": None, "diagnostics": []}


class TestServe:
    """Tests for the serving loop."""

    @pytest.mark.asyncio
    async def test_stops_on_stop_provider(self):
        """Test that StopProvider ends the loop and later lines are ignored."""
        server, writer = make_server(
            lines=[
                {"id": 1, "method": "GetProviderSchema"},
                {"id": 2, "method": "StopProvider"},
                {"id": 3, "method": "GetProviderSchema"},
            ]
        )
        await server.serve()

        responses = read_responses(writer)
        assert [r["id"] for r in responses] == [1, 2]

    @pytest.mark.asyncio
    async def test_handler_failure_keeps_serving(self):
        """Test that an unexpected handler exception answers that id and the loop continues."""
        server, writer = make_server(
            lines=[
                {"id": 1, "method": "ReadDataSource", "params": {"config": {"url": "http://example.test/"}}},
                {"id": 2, "method": "GetProviderSchema"},
            ]
        )
        with patch.object(HttpDataSource, "read", new=AsyncMock(side_effect=RuntimeError("boom"))):
            await server.serve()

        first, second = read_responses(writer)
        assert first["id"] == 1
        [diag] = first["result"]["diagnostics"]
        assert diag["severity"] == "error"
        assert diag["summary"] == "Internal error"
        assert diag["detail"] == "boom"
        assert second["id"] == 2
        assert "schema" in second["result"]

    @pytest.mark.asyncio
    async def test_non_text_charset_is_answered(self, stub_server):
        """Test that a charset=base64 response still produces a ReadDataSource response line."""

        async def base64_charset(request):
            return web.Response(body=b"hello", headers={"Content-Type": "text/plain; charset=base64"})

        async with stub_server(base64_charset) as http_server:
            url = str(http_server.make_url("/ok"))
            async with HttpProvider() as provider:
                server, writer = make_server(
                    provider,
                    lines=[{"id": 1, "method": "ReadDataSource", "params": {"config": {"url": url}}}],
                )
                await server.serve()

        [response] = read_responses(writer)
        assert response["id"] == 1
        assert response["result"]["state"]["response_body"] == "hello"

    @pytest.mark.asyncio
    async def test_stops_on_end_of_input(self):
        """Test that end of input ends the loop."""
        reader = io.StringIO('{"id": 1, "method": "GetProviderSchema"}\n\n')
        writer = io.StringIO()
        await serve(HttpProvider(), reader, writer)
        assert [r["id"] for r in read_responses(writer)] == [1]

    @pytest.mark.asyncio
    async def test_debug_prints_reattach_line(self, capsys):
        """Test that debug mode announces the process on stderr."""
        await serve(HttpProvider(), io.StringIO(""), io.StringIO(), debug=True)
        assert "HTTPPROVIDER_REATTACH=" in capsys.readouterr().err

    def test_reattach_line(self):
        """Test the reattach line payload."""
        payload = json.loads(reattach_line().split("=", 1)[1])
        assert payload["protocol"] == "jsonl"
        assert isinstance(payload["pid"], int)
