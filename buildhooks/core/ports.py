"""Port interfaces for the buildhooks relay.

These abstract base classes define the boundaries between core
domain logic and external adapters. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - ProviderPort: Classify a raw webhook into build triggers
   - TriggerAPIPort: Start one build on the downstream trigger API

2. **Driving Ports** (adapters/external systems call into core)
   - HookPort: Entry point for an inbound webhook request
"""

from abc import ABC, abstractmethod

from .models import HookResponse, InboundWebhook, TransformResult, TriggerAPIParams


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class ProviderPort(ABC):
    """Port for one webhook source (GitHub, Bitbucket, ...).

    Implementations must be stateless across calls and pure with
    respect to the request: the same webhook yields an equal result,
    with no network access and no side effects.

    Implementations must distinguish:
    - Recognized but irrelevant events: TransformResult.skip(reason)
    - Malformed or unparseable payloads: TransformResult.failed(message)
    - Actionable events: TransformResult.triggers(*params), one or more
    """

    @abstractmethod
    def transform(self, webhook: InboundWebhook) -> TransformResult:
        """Classify a raw webhook and extract build trigger params.

        Args:
            webhook: The raw inbound request.

        Returns:
            The normalized TransformResult. Implementations report
            problems through the result rather than raising.
        """


class TriggerAPIPort(ABC):
    """Port for the downstream build trigger API.

    Timeouts and transport concerns belong to the implementation.
    """

    @abstractmethod
    async def trigger(
        self, url: str, api_token: str, params: TriggerAPIParams
    ) -> None:
        """Start one build.

        Args:
            url: Build trigger endpoint.
            api_token: Caller-supplied API credential, passed through opaquely.
            params: Description of the build to start.

        Raises:
            Exception: If the build could not be started. The message is
                surfaced to the webhook caller.
        """

    async def close(self) -> None:
        """Release any held resources. Default is a no-op."""


# ============================================================================
# DRIVING PORTS (External systems call into core)
# ============================================================================


class HookPort(ABC):
    """Port for handling one inbound webhook end to end."""

    @abstractmethod
    async def handle_hook(
        self,
        service_id: str,
        app_slug: str,
        api_token: str,
        webhook: InboundWebhook,
    ) -> HookResponse:
        """Transform the webhook and trigger the resulting builds.

        Args:
            service_id: Identifier of the webhook source provider.
            app_slug: Application whose builds should be started.
            api_token: API credential for the trigger API.
            webhook: The raw inbound request.

        Returns:
            HookResponse with either a success message (accept) or a
            list of errors (reject). Never raises for request-level
            problems.
        """
