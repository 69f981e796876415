"""HTTP server adapter for the webhook receiver.

Provides a threaded HTTP server using Python's built-in http.server
module. Requests are handled on worker threads and the async webhook
pipeline is scheduled onto the application's event loop.

Routes:
- POST /h/<service-id>/<app-slug>/<api-token>: handle a webhook
- GET /: service status document
- GET /health: liveness check
"""

import asyncio
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Coroutine, TypeVar
from urllib.parse import parse_qs, urlsplit

from buildhooks.adapters.webhook.receiver import (
    WebhookReceiver,
    is_hook_path,
    redact_hook_path,
)
from buildhooks.core.models import InboundWebhook

logger = logging.getLogger(__name__)

MAX_BODY_SIZE = 1024 * 1024
REQUEST_TIMEOUT_SECONDS = 60

T = TypeVar("T")


def make_webhook_handler(
    webhook_receiver: WebhookReceiver,
    event_loop: asyncio.AbstractEventLoop,
) -> type[BaseHTTPRequestHandler]:
    """Factory to create a WebhookHTTPHandler class with instance-specific state.

    Dependencies are captured in the closure rather than stored as
    class-level mutable state.

    Args:
        webhook_receiver: Receiver for webhook requests
        event_loop: Event loop for async operations

    Returns:
        A WebhookHTTPHandler class configured with the provided dependencies
    """

    class WebhookHTTPHandler(BaseHTTPRequestHandler):
        """HTTP request handler for webhook endpoints."""

        def do_POST(self) -> None:
            """Handle POST requests to the hook endpoint."""
            path, query = self._split_path()
            if not is_hook_path(path):
                self._send_json(404, {"errors": ["Not found"]})
                return

            try:
                content_length = int(self.headers.get("Content-Length", 0))
            except ValueError:
                self._send_json(400, {"errors": ["Invalid Content-Length header"]})
                return
            if content_length > MAX_BODY_SIZE:
                self._send_json(413, {"errors": ["Request body too large"]})
                return

            body = self.rfile.read(content_length) if content_length > 0 else b""
            webhook = InboundWebhook(
                method="POST",
                path=path,
                headers=dict(self.headers.items()),
                body=body,
                query=query,
            )

            try:
                response = self._run_async(webhook_receiver.handle_webhook(webhook))
            except Exception as e:
                # Log full exception server-side for debugging
                logger.error(f"Error handling webhook request: {e}", exc_info=True)
                # Return generic error to client without details
                self._send_json(500, {"errors": ["Internal server error"]})
                return
            self._send_json(response.status_code, response.body)

        def do_GET(self) -> None:
            """Handle GET requests for the status endpoints."""
            path, _ = self._split_path()
            if path == "/":
                self._send_json(200, webhook_receiver.root_status())
            elif path == "/health":
                self._send_json(200, {"status": "healthy"})
            else:
                self._send_json(404, {"errors": ["Not found"]})

        def _split_path(self) -> tuple[str, dict[str, str]]:
            """Split the request target into path and first-value query params."""
            parts = urlsplit(self.path)
            query = {k: v[0] for k, v in parse_qs(parts.query).items() if v}
            return parts.path or "/", query

        def _run_async(self, coro: Coroutine[Any, Any, T]) -> T:
            """Run an async coroutine on the application loop and wait for it."""
            future = asyncio.run_coroutine_threadsafe(coro, event_loop)
            return future.result(timeout=REQUEST_TIMEOUT_SECONDS)

        def _send_json(self, status_code: int, data: dict[str, Any]) -> None:
            """Send JSON response."""
            payload = json.dumps(data).encode()
            self.send_response(status_code)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(payload)))
            self.end_headers()
            self.wfile.write(payload)

        def log_message(self, format: str, *args: Any) -> None:
            """Log HTTP request with the API token masked."""
            message = format % args
            path = getattr(self, "path", "")
            if path:
                message = message.replace(path, redact_hook_path(path))
            logger.debug(f"HTTP {self.client_address[0]}: {message}")

    return WebhookHTTPHandler


class WebhookHTTPServer:
    """Webhook HTTP server adapter.

    Serves the hook endpoint on a threaded HTTP server so concurrent
    webhooks are handled independently.
    """

    def __init__(
        self,
        webhook_receiver: WebhookReceiver,
        host: str = "0.0.0.0",
        port: int = 8080,
    ):
        """Initialize the HTTP server.

        Args:
            webhook_receiver: WebhookReceiver instance to handle requests.
            host: Host to listen on (default 0.0.0.0).
            port: Port to listen on (default 8080). 0 picks a free port.
        """
        self.webhook_receiver = webhook_receiver
        self.host = host
        self.port = port
        self.server: ThreadingHTTPServer | None = None
        self._server_task: asyncio.Task[None] | None = None

    @property
    def bound_port(self) -> int | None:
        """Port the server is listening on, once started."""
        if self.server is None:
            return None
        return self.server.server_address[1]

    async def start(self) -> None:
        """Start the HTTP server."""
        logger.info(f"Starting webhook HTTP server on {self.host}:{self.port}")

        handler_class = make_webhook_handler(
            webhook_receiver=self.webhook_receiver,
            event_loop=asyncio.get_running_loop(),
        )
        self.server = ThreadingHTTPServer((self.host, self.port), handler_class)
        self.server.daemon_threads = True

        self._server_task = asyncio.create_task(self._run_server())
        logger.info(f"Webhook HTTP server started on port {self.bound_port}")

    async def _run_server(self) -> None:
        """Run the HTTP server loop in a thread pool."""
        if not self.server:
            return

        try:
            # Blocking serve loop runs off the event loop thread
            await asyncio.to_thread(self.server.serve_forever)
        except asyncio.CancelledError:
            pass
        except Exception as e:
            logger.error(f"Webhook HTTP server error: {e}", exc_info=True)

    async def stop(self) -> None:
        """Stop the HTTP server."""
        if self.server:
            await asyncio.to_thread(self.server.shutdown)
            self.server.server_close()
        if self._server_task:
            self._server_task.cancel()
            try:
                await self._server_task
            except asyncio.CancelledError:
                pass
        logger.info("Webhook HTTP server stopped")
