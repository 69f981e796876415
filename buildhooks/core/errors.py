"""Errors raised while handling a webhook.

Every error here is recovered at the request boundary and reported
to the caller as a rejection; none is fatal to the process.
"""

from .models import TriggerAPIParams


class HookError(Exception):
    """Base class for request-scoped webhook handling errors."""


class ValidationError(HookError):
    """A required caller-supplied parameter is missing."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UnsupportedProviderError(HookError):
    """No provider is registered for the requested service id."""

    def __init__(self, service_id: str):
        super().__init__(f"Unsupported Webhook Type / Provider: {service_id}")
        self.service_id = service_id


class TransformError(HookError):
    """The provider could not parse the webhook payload."""

    def __init__(self, reason: str):
        super().__init__(f"Failed to transform the webhook: {reason}")
        self.reason = reason


class NoEventDetectedError(HookError):
    """The payload was valid but held nothing that maps to a build."""

    def __init__(self) -> None:
        super().__init__(
            "After processing the webhook we failed to detect any event "
            "in it which could be turned into a build."
        )


class URLResolutionError(HookError):
    """The build trigger endpoint could not be derived."""


class TriggerDispatchError(HookError):
    """A single downstream trigger call failed."""

    def __init__(self, params: TriggerAPIParams, reason: str):
        super().__init__(f"Failed to Trigger the Build: {reason}")
        self.params = params
        self.reason = reason
