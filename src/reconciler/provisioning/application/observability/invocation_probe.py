"""Protocol for per-invocation observability.

Captures what happened to each inbound event as a whole: received, ignored
as irrelevant, rejected as unparseable, or dropped after a reconciliation
failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from provisioning.domain.exceptions import ReconciliationError
    from shared_kernel.observability_context import ObservationContext


class InvocationProbe(Protocol):
    """Domain probe for the lifecycle of one inbound event."""

    def event_received(self, source: str, detail_type: str) -> None:
        """Record that an event envelope was received."""
        ...

    def event_ignored(self, source: str, detail_type: str) -> None:
        """Record that an event matched no known source/type pair."""
        ...

    def event_rejected(self, reason: str) -> None:
        """Record that an event was not an envelope at all."""
        ...

    def event_dropped(self, error: ReconciliationError) -> None:
        """Record that processing failed and the event was dropped."""
        ...

    def with_context(self, context: ObservationContext) -> InvocationProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultInvocationProbe:
    """Default implementation of InvocationProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultInvocationProbe:
        """Create a new probe with observation context bound."""
        return DefaultInvocationProbe(logger=self._logger, context=context)

    def event_received(self, source: str, detail_type: str) -> None:
        """Record that an event envelope was received."""
        self._logger.info(
            "lifecycle_event_received",
            source=source,
            detail_type=detail_type,
            **self._get_context_kwargs(),
        )

    def event_ignored(self, source: str, detail_type: str) -> None:
        """Record that an event matched no known source/type pair."""
        self._logger.info(
            "lifecycle_event_ignored",
            source=source,
            detail_type=detail_type,
            **self._get_context_kwargs(),
        )

    def event_rejected(self, reason: str) -> None:
        """Record that an event was not an envelope at all."""
        self._logger.error(
            "lifecycle_event_rejected",
            reason=reason,
            **self._get_context_kwargs(),
        )

    def event_dropped(self, error: ReconciliationError) -> None:
        """Record that processing failed and the event was dropped.

        Transient failures are warnings; the rest are errors.
        """
        log = self._logger.warning if error.transient else self._logger.error
        log(
            "lifecycle_event_dropped",
            error_code=error.code,
            error=str(error),
            transient=error.transient,
            **self._get_context_kwargs(),
        )
