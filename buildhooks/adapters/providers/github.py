"""GitHub webhook provider.

Implements ProviderPort for GitHub repository webhooks. Push events
to branches and tags, and pull request events that change the code
or the target branch, are turned into build triggers.
"""

import json
from typing import Any
from urllib.parse import parse_qs

from buildhooks.core.models import (
    BuildParams,
    InboundWebhook,
    TransformResult,
    TriggerAPIParams,
)
from buildhooks.core.ports import ProviderPort


EVENT_HEADER = "X-GitHub-Event"
BRANCH_REF_PREFIX = "refs/heads/"
TAG_REF_PREFIX = "refs/tags/"

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

BUILDABLE_PR_ACTIONS = frozenset({"opened", "reopened", "synchronize", "edited"})


def _get_object(container: dict[str, Any], key: str) -> dict[str, Any]:
    """Nested JSON object at key; missing or null reads as empty.

    Raises:
        ValueError: If the value is present but not an object.
    """
    value = container.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Invalid payload: '{key}' should be an object")
    return value


def _get_str(container: dict[str, Any], key: str) -> str:
    """String at key; missing or null reads as empty.

    Raises:
        ValueError: If the value is present but not a string.
    """
    value = container.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"Invalid payload: '{key}' should be a string")
    return value


class GitHubProvider(ProviderPort):
    """Transforms GitHub push and pull_request webhooks."""

    def transform(self, webhook: InboundWebhook) -> TransformResult:
        content_type = webhook.content_type()
        if content_type not in (JSON_CONTENT_TYPE, FORM_CONTENT_TYPE):
            return TransformResult.failed(
                f"Content-Type is not supported: {content_type or '(none)'}"
            )

        event = webhook.header(EVENT_HEADER)
        if not event:
            return TransformResult.failed(
                f"Issue with Headers: No value found in header for the key: {EVENT_HEADER}"
            )

        if event == "ping":
            return TransformResult.skip("Ping event received")
        if event not in ("push", "pull_request"):
            return TransformResult.skip(f"Unsupported GitHub Webhook event: {event}")

        try:
            payload = self._decode_payload(webhook.body, content_type)
        except ValueError as e:
            return TransformResult.failed(str(e))

        try:
            if event == "push":
                return self._transform_push(payload)
            return self._transform_pull_request(payload)
        except ValueError as e:
            return TransformResult.failed(str(e))

    @staticmethod
    def _decode_payload(body: bytes, content_type: str) -> dict[str, Any]:
        """Decode the event payload from the request body.

        Raises:
            ValueError: If the body is empty or not a JSON object.
        """
        if not body:
            raise ValueError(
                "Failed to read content of request body: no or empty request body"
            )

        raw: str | bytes = body
        if content_type == FORM_CONTENT_TYPE:
            form = parse_qs(body.decode("utf-8", errors="replace"))
            values = form.get("payload")
            if not values or not values[0]:
                raise ValueError("Failed to parse request body: missing 'payload' field")
            raw = values[0]

        try:
            payload = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"Failed to parse request body as JSON: {e}") from e
        if not isinstance(payload, dict):
            raise ValueError("Failed to parse request body: expected a JSON object")
        return payload

    def _transform_push(self, payload: dict[str, Any]) -> TransformResult:
        if payload.get("deleted"):
            return TransformResult.skip(
                "This is a 'Deleted' event, no build can be started"
            )

        ref = _get_str(payload, "ref")
        head_commit = _get_object(payload, "head_commit")
        commit_hash = _get_str(head_commit, "id")
        commit_message = _get_str(head_commit, "message")

        if ref.startswith(BRANCH_REF_PREFIX):
            if head_commit.get("distinct") is False:
                return TransformResult.skip("Head Commit is not Distinct")
            if not commit_hash:
                return TransformResult.failed("Missing commit hash")
            params = BuildParams(
                branch=ref[len(BRANCH_REF_PREFIX):],
                commit_hash=commit_hash,
                commit_message=commit_message,
            )
            return TransformResult.triggers(TriggerAPIParams(build_params=params))

        if ref.startswith(TAG_REF_PREFIX):
            if not commit_hash:
                return TransformResult.failed("Missing commit hash")
            params = BuildParams(
                tag=ref[len(TAG_REF_PREFIX):],
                commit_hash=commit_hash,
                commit_message=commit_message,
            )
            return TransformResult.triggers(TriggerAPIParams(build_params=params))

        return TransformResult.skip(f"Ref ({ref}) is not a head nor a tag ref")

    def _transform_pull_request(self, payload: dict[str, Any]) -> TransformResult:
        action = _get_str(payload, "action")
        if action not in BUILDABLE_PR_ACTIONS:
            return TransformResult.skip(
                f"Pull Request action doesn't require a build: {action}"
            )
        if action == "edited" and not _get_object(payload, "changes").get("base"):
            return TransformResult.skip(
                "Pull Request edit doesn't require a build: "
                "only title and/or description was changed"
            )

        pull_request = payload.get("pull_request")
        if not isinstance(pull_request, dict):
            return TransformResult.failed("Missing pull_request in payload")
        if pull_request.get("merged"):
            return TransformResult.skip("Pull Request already merged")
        if pull_request.get("mergeable") is False:
            return TransformResult.failed("Pull Request is not mergeable")

        head = _get_object(pull_request, "head")
        base = _get_object(pull_request, "base")
        commit_hash = _get_str(head, "sha")
        if not commit_hash:
            return TransformResult.failed("Missing head commit hash")

        number = pull_request.get("number") or payload.get("number")
        if not isinstance(number, int):
            return TransformResult.failed("Missing pull request number")

        title = _get_str(pull_request, "title")
        description = _get_str(pull_request, "body")
        commit_message = f"{title}\n\n{description}" if description else title

        head_repo = _get_object(head, "repo")
        params = BuildParams(
            branch=_get_str(head, "ref"),
            branch_dest=_get_str(base, "ref"),
            commit_hash=commit_hash,
            commit_message=commit_message,
            pull_request_id=number,
            pull_request_repository_url=_get_str(head_repo, "clone_url"),
            pull_request_merge_branch=f"pull/{number}/merge",
            pull_request_head_branch=f"pull/{number}/head",
        )
        return TransformResult.triggers(TriggerAPIParams(build_params=params))
