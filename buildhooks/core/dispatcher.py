"""Fan-out of build triggers to the downstream trigger API.

Every trigger param is attempted, in input order, regardless of how
earlier attempts went. Failures are collected per attempt and reported
together.
"""

import logging
from collections.abc import Sequence

from .errors import NoEventDetectedError, TriggerDispatchError
from .models import DispatchOutcome, DispatchResult, TriggerAPIParams
from .ports import TriggerAPIPort

logger = logging.getLogger(__name__)


class TriggerDispatcher:
    """Submits each trigger param to the trigger API independently.

    Calls are issued sequentially: the trigger API is not known to
    accept concurrent calls with the same credential.
    """

    def __init__(self, trigger_api: TriggerAPIPort):
        self.trigger_api = trigger_api

    async def dispatch(
        self,
        url: str,
        api_token: str,
        params: Sequence[TriggerAPIParams],
    ) -> DispatchResult:
        """Trigger one build per param.

        Args:
            url: Build trigger endpoint.
            api_token: API credential passed to every call.
            params: Builds to start.

        Returns:
            DispatchResult with one outcome per param. An empty input
            yields a single synthesized "no event" error and no calls.
        """
        if not params:
            return DispatchResult(synthesized_errors=(str(NoEventDetectedError()),))

        outcomes: list[DispatchOutcome] = []
        for index, trigger_params in enumerate(params):
            outcomes.append(
                await self._attempt(url, api_token, trigger_params, index, len(params))
            )

        failed = sum(1 for o in outcomes if not o.succeeded)
        logger.info(
            f"Dispatched {len(outcomes)} build trigger(s), {failed} failed",
            extra={"attempted": len(outcomes), "failed": failed},
        )
        return DispatchResult(outcomes=tuple(outcomes))

    async def _attempt(
        self,
        url: str,
        api_token: str,
        params: TriggerAPIParams,
        index: int,
        total: int,
    ) -> DispatchOutcome:
        """Run one trigger call, converting any failure into an outcome."""
        try:
            await self.trigger_api.trigger(url, api_token, params)
        except Exception as e:
            error = TriggerDispatchError(params, str(e))
            logger.warning(
                f"Build trigger {index + 1}/{total} failed: {e}",
                extra={"build_params": params.build_params.to_payload()},
            )
            return DispatchOutcome(params=params, error=str(error))
        return DispatchOutcome(params=params)
