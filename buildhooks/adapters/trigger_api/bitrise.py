"""Bitrise build trigger API adapter.

Implements TriggerAPIPort by POSTing a build request to the Bitrise
build trigger endpoint.
"""

import logging
from typing import Any

import httpx

from buildhooks.core.models import TriggerAPIParams
from buildhooks.core.ports import TriggerAPIPort

logger = logging.getLogger(__name__)


def build_request_body(api_token: str, params: TriggerAPIParams) -> dict[str, Any]:
    """Render the JSON body of a build trigger request."""
    body: dict[str, Any] = {
        "hook_info": {"type": "bitrise", "api_token": api_token},
        "build_params": params.build_params.to_payload(),
    }
    if params.triggered_by:
        body["triggered_by"] = params.triggered_by
    return body


def mask_token(api_token: str) -> str:
    """Mask an API token for logging, keeping a short prefix."""
    if len(api_token) <= 4:
        return "***"
    return f"{api_token[:4]}***"


class BitriseTriggerAPI(TriggerAPIPort):
    """Starts builds through the Bitrise build trigger API."""

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Bitrise trigger API adapter.

        Args:
            timeout_seconds: Timeout for each trigger request.
            transport: Optional httpx transport (used by tests).
        """
        self.timeout_seconds = timeout_seconds
        self.transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self.transport,
                headers={"Content-Type": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def trigger(
        self, url: str, api_token: str, params: TriggerAPIParams
    ) -> None:
        """POST one build request.

        Raises:
            ValueError: If the params do not address a build.
            RuntimeError: If the API answers with a non-2xx status.
            httpx.RequestError: If the request cannot be sent.
        """
        params.validate()
        body = build_request_body(api_token, params)

        client = await self._get_client()
        try:
            response = await client.post(url, json=body)
        except httpx.RequestError as e:
            logger.error(
                f"Build trigger request failed: {e}",
                extra={"url": url},
            )
            raise

        if not response.is_success:
            logger.error(
                f"Build trigger failed: {response.status_code}",
                extra={"url": url, "response": response.text},
            )
            raise RuntimeError(
                f"Build Trigger failed: status code should be 2xx ({response.status_code})"
            )

        logger.info(
            "Build triggered",
            extra={
                "url": url,
                "status_code": response.status_code,
                "build_params": body["build_params"],
            },
        )
