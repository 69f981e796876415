"""Webhook handling pipeline.

Implements HookPort: validate the caller parameters, resolve the
provider, transform the webhook, then either acknowledge a skip,
reject a failure, or dispatch the resulting build triggers.
"""

import logging

from .composer import OutcomeComposer
from .dispatcher import TriggerDispatcher
from .errors import (
    HookError,
    NoEventDetectedError,
    TransformError,
    URLResolutionError,
    UnsupportedProviderError,
    ValidationError,
)
from .models import HookResponse, InboundWebhook, TransformResult
from .ports import HookPort, ProviderPort
from .registry import ProviderRegistry
from .trigger_url import TriggerURLResolver

logger = logging.getLogger(__name__)


class HookService(HookPort):
    """Transform-and-dispatch pipeline for one webhook request.

    Holds no per-request state; the registry and resolver are
    read-only, so concurrent requests share one instance.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        resolver: TriggerURLResolver,
        dispatcher: TriggerDispatcher,
        composer: OutcomeComposer | None = None,
    ):
        self.registry = registry
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.composer = composer or OutcomeComposer()

    async def handle_hook(
        self,
        service_id: str,
        app_slug: str,
        api_token: str,
        webhook: InboundWebhook,
    ) -> HookResponse:
        try:
            return await self._handle(service_id, app_slug, api_token, webhook)
        except HookError as e:
            logger.info(
                f"Webhook rejected: {e}",
                extra={"service_id": service_id, "app_slug": app_slug},
            )
            return self.composer.rejected_single(e)

    async def _handle(
        self,
        service_id: str,
        app_slug: str,
        api_token: str,
        webhook: InboundWebhook,
    ) -> HookResponse:
        self._validate(service_id, app_slug, api_token)
        provider = self._resolve_provider(service_id)

        try:
            result = provider.transform(webhook)
        except Exception as e:
            logger.error(
                f"Provider {service_id} raised while transforming: {e}",
                exc_info=True,
            )
            raise TransformError(str(e)) from e

        if result.should_skip:
            logger.info(
                f"Webhook skipped: {result.skip_reason}",
                extra={"service_id": service_id, "app_slug": app_slug},
            )
            return self.composer.skipped(result.skip_reason)
        if result.error is not None:
            error = TransformError(result.error)
            logger.debug(str(error), extra={"service_id": service_id})
            raise error
        if not result.trigger_params:
            raise NoEventDetectedError()

        try:
            trigger_url = self.resolver.resolve(app_slug)
        except URLResolutionError as e:
            logger.error(
                f"Failed to create Build Trigger URL: {e}",
                extra={"app_slug": app_slug},
            )
            raise URLResolutionError(f"Failed to create Build Trigger URL: {e}") from e

        return await self._dispatch(trigger_url, api_token, result)

    async def _dispatch(
        self, trigger_url: str, api_token: str, result: TransformResult
    ) -> HookResponse:
        dispatch = await self.dispatcher.dispatch(
            trigger_url, api_token, result.trigger_params
        )
        if not dispatch.succeeded:
            return self.composer.rejected(dispatch.errors)
        return self.composer.triggered(dispatch.attempted)

    @staticmethod
    def _validate(service_id: str, app_slug: str, api_token: str) -> None:
        """Check caller-supplied parameters in order; the first missing one wins."""
        if not service_id:
            raise ValidationError("service-id", "No service-id defined")
        if not app_slug:
            raise ValidationError("app-slug", "No App Slug parameter defined")
        if not api_token:
            raise ValidationError("api-token", "No API Token parameter defined")

    def _resolve_provider(self, service_id: str) -> ProviderPort:
        provider = self.registry.lookup(service_id)
        if provider is None:
            raise UnsupportedProviderError(service_id)
        return provider
