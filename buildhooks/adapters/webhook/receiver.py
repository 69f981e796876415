"""Webhook receiver for inbound build hooks.

Extracts the caller-supplied parameters (service id, app slug and API
token) from the request and forwards the raw webhook to the HookPort.
Parameters are read from the /h/<service-id>/<app-slug>/<api-token>
path, with query parameters as a fallback for missing segments.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any
from urllib.parse import unquote

from buildhooks.core.models import HookResponse, InboundWebhook
from buildhooks.core.ports import HookPort

logger = logging.getLogger(__name__)

HOOK_PATH_PREFIX = "/h"


@dataclass(frozen=True)
class HookRoute:
    """Caller-supplied parameters of a hook request. Missing values are empty."""

    service_id: str = ""
    app_slug: str = ""
    api_token: str = ""


def redact_hook_path(target: str) -> str:
    """Mask the API token in a request target (path segment or query) for logging."""
    target = re.sub(r"^(/h/[^/?]*/[^/?]*/)[^/?]+", r"\1***", target)
    return re.sub(r"([?&]api_token=)[^&]*", r"\1***", target)


def is_hook_path(path: str) -> bool:
    """Whether a request path targets the hook endpoint."""
    return path == HOOK_PATH_PREFIX or path.startswith(HOOK_PATH_PREFIX + "/")


def parse_hook_route(path: str, query: dict[str, str] | None = None) -> HookRoute:
    """Extract hook parameters from a request path and query.

    Args:
        path: Request path without query string, e.g. /h/github/my-app/token.
        query: Query parameters; service_id, app_slug and api_token fill
            any segment missing from the path.

    Returns:
        HookRoute with whatever parameters were found.
    """
    query = query or {}
    segments = [unquote(s) for s in path[len(HOOK_PATH_PREFIX):].strip("/").split("/")]
    segments += [""] * (3 - len(segments))
    service_id, app_slug, api_token = segments[:3]
    return HookRoute(
        service_id=service_id or query.get("service_id", ""),
        app_slug=app_slug or query.get("app_slug", ""),
        api_token=api_token or query.get("api_token", ""),
    )


class WebhookReceiver:
    """Receives inbound webhooks and forwards them to the HookPort."""

    def __init__(
        self,
        hook_port: HookPort,
        environment_mode: str = "development",
        version: str = "",
    ):
        """Initialize the webhook receiver.

        Args:
            hook_port: HookPort implementation handling each webhook.
            environment_mode: Reported in the root status document.
            version: Application version reported in the root status document.
        """
        self.hook_port = hook_port
        self.environment_mode = environment_mode
        self.version = version

    async def handle_webhook(self, webhook: InboundWebhook) -> HookResponse:
        """Handle one inbound webhook.

        Args:
            webhook: Raw request; its path and query carry the hook parameters.

        Returns:
            HookResponse to serialize back to the caller.
        """
        route = parse_hook_route(webhook.path, dict(webhook.query))
        response = await self.hook_port.handle_hook(
            service_id=route.service_id,
            app_slug=route.app_slug,
            api_token=route.api_token,
            webhook=webhook,
        )
        logger.info(
            "Webhook handled",
            extra={
                "service_id": route.service_id,
                "app_slug": route.app_slug,
                "status_code": response.status_code,
            },
        )
        return response

    def root_status(self) -> dict[str, Any]:
        """Status document served at the root path."""
        return {
            "message": "Welcome to buildhooks!",
            "version": self.version,
            "environment_mode": self.environment_mode,
            "time": datetime.now(timezone.utc).isoformat(),
        }
