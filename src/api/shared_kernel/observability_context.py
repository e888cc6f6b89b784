"""Observation context for domain-oriented observability.

Observation contexts collect and manage contextual metadata for instrumentation,
following the Domain Oriented Observability pattern.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ObservationContext:
    """Immutable context containing metadata for observability.

    Captures request-scoped metadata that should be included with all
    instrumentation events, so that log lines emitted by the pipeline, the
    handlers and the repository for one request can be correlated.

    Attributes:
        request_id: Unique identifier for the current request/operation.
        request_type: Name of the command or query being processed.
        user_id: Identifier of the user the operation targets (if applicable).
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(
            request_id="req-123",
            request_type="GetUserQuery",
        )
        probe = DefaultPipelineProbe().with_context(context)
    """

    request_id: str | None = None
    request_type: str | None = None
    user_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.request_type is not None:
            result["request_type"] = self.request_type
        if self.user_id is not None:
            result["user_id"] = self.user_id
        result.update(self.extra)
        return result

    def with_user(self, user_id: str) -> ObservationContext:
        """Create a new context with the target user set."""
        return ObservationContext(
            request_id=self.request_id,
            request_type=self.request_type,
            user_id=user_id,
            extra=self.extra,
        )

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            request_type=self.request_type,
            user_id=self.user_id,
            extra=new_extra,
        )
