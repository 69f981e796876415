"""Fake ProviderPort implementation for testing."""

from buildhooks.core.models import InboundWebhook, TransformResult
from buildhooks.core.ports import ProviderPort


class FakeProvider(ProviderPort):
    """Deterministic provider returning a configured TransformResult.

    Captures every webhook it is asked to transform.
    """

    def __init__(self, result: TransformResult | None = None):
        """Initialize with the result to return (default: no triggers)."""
        self.result = result or TransformResult()
        self.transformed: list[InboundWebhook] = []
        self.exception: Exception | None = None

    def transform(self, webhook: InboundWebhook) -> TransformResult:
        self.transformed.append(webhook)
        if self.exception is not None:
            raise self.exception
        return self.result

    @property
    def transform_call_count(self) -> int:
        return len(self.transformed)
