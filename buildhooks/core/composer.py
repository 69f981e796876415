"""Composition of client-facing responses from pipeline outcomes."""

from collections.abc import Sequence

from .errors import HookError
from .models import HookResponse


class OutcomeComposer:
    """Maps pipeline results to a single HookResponse.

    Pure presentation logic: skips and successful dispatches are
    accepted, every error condition is rejected with its error list.
    """

    @staticmethod
    def skipped(reason: str | None) -> HookResponse:
        return HookResponse.success(f"Acknowledged, but skipping. Reason: {reason}")

    @staticmethod
    def triggered(count: int) -> HookResponse:
        if count == 1:
            return HookResponse.success("Successfully triggered 1 build.")
        return HookResponse.success(f"Successfully triggered {count} builds.")

    @staticmethod
    def rejected_single(error: HookError | str) -> HookResponse:
        return HookResponse.failure([str(error)])

    @staticmethod
    def rejected(errors: Sequence[str]) -> HookResponse:
        return HookResponse.failure(list(errors))
