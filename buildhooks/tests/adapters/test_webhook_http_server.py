"""Tests for the WebhookHTTPServer adapter against a live local socket."""

import asyncio
import json
import logging

import httpx
import pytest

from buildhooks.adapters.webhook.http_server import MAX_BODY_SIZE, WebhookHTTPServer
from buildhooks.adapters.webhook.receiver import WebhookReceiver
from buildhooks.core.models import HookResponse
from buildhooks.tests.fakes import FakeHookPort


@pytest.fixture
def hook_port() -> FakeHookPort:
    return FakeHookPort(HookResponse.success("Successfully triggered 1 build."))


@pytest.fixture
async def server(hook_port):
    """Start a server on a free port for the duration of a test."""
    http_server = WebhookHTTPServer(
        webhook_receiver=WebhookReceiver(hook_port=hook_port, version="test"),
        host="127.0.0.1",
        port=0,
    )
    await http_server.start()
    yield http_server
    await http_server.stop()


def base_url(server: WebhookHTTPServer) -> str:
    return f"http://127.0.0.1:{server.bound_port}"


class TestWebhookHTTPServerInitialization:
    """Tests for WebhookHTTPServer configuration."""

    def test_defaults(self):
        server = WebhookHTTPServer(webhook_receiver=WebhookReceiver(hook_port=FakeHookPort()))

        assert server.host == "0.0.0.0"
        assert server.port == 8080
        assert server.bound_port is None


class TestWebhookHTTPRequests:
    """Tests for actual HTTP request/response handling."""

    @pytest.mark.asyncio
    async def test_hook_request_is_forwarded(self, server, hook_port):
        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            response = await client.post(
                "/h/github/my-app/token-1",
                content=b'{"zen": "hi"}',
                headers={"Content-Type": "application/json", "X-GitHub-Event": "ping"},
            )

        assert response.status_code == 200
        assert response.json() == {"message": "Successfully triggered 1 build."}
        service_id, app_slug, api_token, webhook = hook_port.get_last_request()
        assert (service_id, app_slug, api_token) == ("github", "my-app", "token-1")
        assert webhook.body == b'{"zen": "hi"}'
        assert webhook.header("x-github-event") == "ping"

    @pytest.mark.asyncio
    async def test_query_parameters_reach_receiver(self, server, hook_port):
        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            await client.post("/h/github?app_slug=my-app&api_token=t", content=b"{}")

        assert hook_port.get_last_request()[:3] == ("github", "my-app", "t")

    @pytest.mark.asyncio
    async def test_rejection_status_and_body(self, server, hook_port):
        hook_port.response = HookResponse.failure(["No App Slug parameter defined"])

        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            response = await client.post("/h/github", content=b"{}")

        assert response.status_code == 400
        assert response.json() == {"errors": ["No App Slug parameter defined"]}

    @pytest.mark.asyncio
    async def test_request_log_masks_api_token(self, server, caplog):
        with caplog.at_level(logging.DEBUG, logger="buildhooks.adapters.webhook.http_server"):
            async with httpx.AsyncClient(base_url=base_url(server)) as client:
                await client.post("/h/github/my-app/secret-tok", content=b"{}")

        messages = [r.getMessage() for r in caplog.records]
        assert any("/h/github/my-app/***" in m for m in messages)
        assert not any("secret-tok" in m for m in messages)

    @pytest.mark.asyncio
    async def test_unexpected_error_is_generic_500(self, server, hook_port):
        hook_port.exception = RuntimeError("secret internals")

        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            response = await client.post("/h/github/a/b", content=b"{}")

        assert response.status_code == 500
        assert "secret internals" not in response.text

    @pytest.mark.asyncio
    async def test_body_too_large(self, server, hook_port):
        reader, writer = await asyncio.open_connection("127.0.0.1", server.bound_port)
        writer.write(
            b"POST /h/github/a/b HTTP/1.1\r\n"
            b"Host: 127.0.0.1\r\n"
            + f"Content-Length: {MAX_BODY_SIZE + 1}\r\n\r\n".encode()
        )
        await writer.drain()
        status_line = await reader.readline()
        writer.close()
        await writer.wait_closed()

        assert b" 413 " in status_line
        assert hook_port.requests == []

    @pytest.mark.asyncio
    async def test_unknown_post_path(self, server):
        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            response = await client.post("/api/other", content=b"{}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_root_and_health(self, server):
        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            root = await client.get("/")
            health = await client.get("/health")
            missing = await client.get("/missing")

        assert root.status_code == 200
        assert root.json()["version"] == "test"
        assert health.json() == {"status": "healthy"}
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_response_is_json(self, server):
        async with httpx.AsyncClient(base_url=base_url(server)) as client:
            response = await client.get("/health")

        assert response.headers["content-type"].startswith("application/json")
        assert json.loads(response.content) == {"status": "healthy"}
