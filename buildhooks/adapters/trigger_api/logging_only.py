"""Log-only trigger API adapter.

Implements TriggerAPIPort without network access: the build request
is validated and written to the log instead of being sent. Used in
development mode when no override trigger URL is configured.
"""

import json
import logging

from buildhooks.core.models import TriggerAPIParams
from buildhooks.core.ports import TriggerAPIPort

from .bitrise import build_request_body, mask_token

logger = logging.getLogger(__name__)


class LoggingTriggerAPI(TriggerAPIPort):
    """Logs build trigger requests instead of sending them."""

    async def trigger(
        self, url: str, api_token: str, params: TriggerAPIParams
    ) -> None:
        params.validate()
        body = build_request_body(mask_token(api_token), params)
        logger.info(
            f"Only logging build trigger to {url}: {json.dumps(body, sort_keys=True)}"
        )
