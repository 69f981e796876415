"""Fake TriggerAPIPort implementation for testing."""

from buildhooks.core.models import TriggerAPIParams
from buildhooks.core.ports import TriggerAPIPort


class FakeTriggerAPI(TriggerAPIPort):
    """In-memory trigger API for testing.

    Records every trigger call. Calls can be configured to fail by
    their 1-based position, or all at once.
    """

    def __init__(self) -> None:
        """Initialize with empty call history."""
        self.calls: list[tuple[str, str, TriggerAPIParams]] = []
        self.fail_on_calls: set[int] = set()
        self.should_fail: bool = False
        self.fail_message: str = "Trigger failed"
        self.closed: bool = False

    async def trigger(
        self, url: str, api_token: str, params: TriggerAPIParams
    ) -> None:
        self.calls.append((url, api_token, params))
        if self.should_fail or len(self.calls) in self.fail_on_calls:
            raise RuntimeError(f"{self.fail_message} (call {len(self.calls)})")

    async def close(self) -> None:
        self.closed = True

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def set_fail_on_calls(self, *positions: int, message: str = "Trigger failed") -> None:
        """Make the calls at the given 1-based positions fail."""
        self.fail_on_calls = set(positions)
        self.fail_message = message

    def set_should_fail(self, should_fail: bool, message: str = "Trigger failed") -> None:
        """Configure every call to fail."""
        self.should_fail = should_fail
        self.fail_message = message

    def reset(self) -> None:
        """Reset call history and failure configuration."""
        self.calls.clear()
        self.fail_on_calls = set()
        self.should_fail = False
        self.fail_message = "Trigger failed"
