"""Fake HookPort implementation for testing."""

from buildhooks.core.models import HookResponse, InboundWebhook
from buildhooks.core.ports import HookPort


class FakeHookPort(HookPort):
    """Captures hook requests and returns a canned response."""

    def __init__(self, response: HookResponse | None = None):
        self.response = response or HookResponse.success("ok")
        self.requests: list[tuple[str, str, str, InboundWebhook]] = []
        self.exception: Exception | None = None

    async def handle_hook(
        self,
        service_id: str,
        app_slug: str,
        api_token: str,
        webhook: InboundWebhook,
    ) -> HookResponse:
        self.requests.append((service_id, app_slug, api_token, webhook))
        if self.exception is not None:
            raise self.exception
        return self.response

    def get_last_request(self) -> tuple[str, str, str, InboundWebhook] | None:
        """Get the most recent request, if any."""
        if self.requests:
            return self.requests[-1]
        return None
