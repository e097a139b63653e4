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

    Captures invocation-scoped metadata that should be included with all
    instrumentation events, so a single event can be followed from the
    normalizer through to the store write.

    Attributes:
        request_id: Identifier of the current invocation (if known).
        event_id: Identifier of the upstream event being processed.
        event_source: Upstream source of the event (e.g. "aws.controltower").
        extra: Additional contextual metadata.

    Example:
        context = ObservationContext(request_id="req-123", event_id="evt-1")
        probe = DefaultCorrelatorProbe().with_context(context)
    """

    request_id: str | None = None
    event_id: str | None = None
    event_source: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging.

        Only includes non-None values to keep logs clean.
        """
        result: dict[str, Any] = {}
        if self.request_id is not None:
            result["request_id"] = self.request_id
        if self.event_id is not None:
            result["event_id"] = self.event_id
        if self.event_source is not None:
            result["event_source"] = self.event_source
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> ObservationContext:
        """Create a new context with additional metadata."""
        new_extra = {**self.extra, **kwargs}
        return ObservationContext(
            request_id=self.request_id,
            event_id=self.event_id,
            event_source=self.event_source,
            extra=new_extra,
        )
