"""Core domain logic for the buildhooks relay.

This package contains zero external dependencies and represents
the pure transform-and-dispatch logic of the application. All
adapters and external integrations are handled by the adapters package.
"""

from .models import (
    BuildParams,
    DispatchOutcome,
    DispatchResult,
    HookResponse,
    InboundWebhook,
    TransformResult,
    TriggerAPIParams,
)

__all__ = [
    "BuildParams",
    "DispatchOutcome",
    "DispatchResult",
    "HookResponse",
    "InboundWebhook",
    "TransformResult",
    "TriggerAPIParams",
]
