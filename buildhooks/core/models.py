"""Domain models for the buildhooks relay.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

HTTP_ACCEPT = 200
HTTP_REJECT = 400


@dataclass(frozen=True)
class InboundWebhook:
    """A raw inbound webhook request.

    The core's transport-neutral view of an HTTP request: providers
    classify events from this and nothing else.
    """

    method: str
    path: str
    headers: Mapping[str, str]
    body: bytes = b""
    query: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize header names and freeze the mappings."""
        object.__setattr__(
            self,
            "headers",
            MappingProxyType({k.lower(): v for k, v in self.headers.items()}),
        )
        object.__setattr__(self, "query", MappingProxyType(dict(self.query)))

    def header(self, name: str, default: str = "") -> str:
        """Case-insensitive header lookup."""
        return self.headers.get(name.lower(), default)

    def content_type(self) -> str:
        """Media type of the body without parameters (e.g. charset)."""
        return self.header("Content-Type").split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class BuildParams:
    """Descriptor of a single build to start.

    Content is owned by the downstream trigger API; the core only
    passes it through.
    """

    branch: str = ""
    tag: str = ""
    commit_hash: str = ""
    commit_message: str = ""
    workflow_id: str = ""
    branch_dest: str = ""
    pull_request_id: int | None = None
    pull_request_repository_url: str = ""
    pull_request_merge_branch: str = ""
    pull_request_head_branch: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Render the non-empty fields as a JSON-ready dict."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) not in ("", None)
        }


@dataclass(frozen=True)
class TriggerAPIParams:
    """Parameters for one call to the build trigger API."""

    build_params: BuildParams
    triggered_by: str = "webhook"

    def validate(self) -> None:
        """Ensure the build can be addressed by the trigger API.

        Raises:
            ValueError: If none of branch, tag or workflow_id is set.
        """
        bp = self.build_params
        if not (bp.branch or bp.tag or bp.workflow_id):
            raise ValueError(
                "Missing Branch, Tag and WorkflowID parameters - "
                "at least one of these is required"
            )


@dataclass(frozen=True)
class TransformResult:
    """Normalized outcome of inspecting one raw webhook.

    At most one of should_skip and error applies. A result with neither
    and no trigger params is valid here; the service treats it as
    "no event detected".
    """

    should_skip: bool = False
    skip_reason: str | None = None
    error: str | None = None
    trigger_params: tuple[TriggerAPIParams, ...] = ()

    def __post_init__(self) -> None:
        """Validate transform result invariants on creation."""
        if self.should_skip and self.error is not None:
            raise ValueError("a transform result cannot be both skipped and failed")
        if self.should_skip and self.trigger_params:
            raise ValueError("a skipped transform result cannot carry trigger params")
        if self.error is not None and self.trigger_params:
            raise ValueError("a failed transform result cannot carry trigger params")
        if not isinstance(self.trigger_params, tuple):
            object.__setattr__(self, "trigger_params", tuple(self.trigger_params))

    @classmethod
    def skip(cls, reason: str) -> "TransformResult":
        return cls(should_skip=True, skip_reason=reason)

    @classmethod
    def failed(cls, message: str) -> "TransformResult":
        return cls(error=message)

    @classmethod
    def triggers(cls, *params: TriggerAPIParams) -> "TransformResult":
        return cls(trigger_params=tuple(params))


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of one downstream trigger attempt."""

    params: TriggerAPIParams
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class DispatchResult:
    """Aggregate of a fan-out dispatch.

    outcomes holds one entry per attempted trigger, in input order.
    errors may hold a synthesized entry with no matching outcome when
    nothing could be attempted.
    """

    outcomes: tuple[DispatchOutcome, ...] = ()
    synthesized_errors: tuple[str, ...] = ()

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def errors(self) -> list[str]:
        return list(self.synthesized_errors) + [
            o.error for o in self.outcomes if o.error is not None
        ]

    @property
    def succeeded(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class HookResponse:
    """Client-facing result of handling one webhook."""

    status_code: int
    body: dict[str, Any]

    @classmethod
    def success(cls, message: str) -> "HookResponse":
        return cls(status_code=HTTP_ACCEPT, body={"message": message})

    @classmethod
    def failure(cls, errors: list[str]) -> "HookResponse":
        if not errors:
            raise ValueError("a failure response needs at least one error")
        return cls(status_code=HTTP_REJECT, body={"errors": list(errors)})

    @property
    def accepted(self) -> bool:
        return self.status_code == HTTP_ACCEPT
