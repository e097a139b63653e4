"""Domain probe for event normalization."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from provisioning.domain.value_objects import SignalKind
    from shared_kernel.observability_context import ObservationContext


class NormalizerProbe(Protocol):
    """Domain probe for turning raw envelopes into lifecycle signals."""

    def signal_normalized(self, kind: SignalKind) -> None:
        """Record that an envelope produced a signal."""
        ...

    def event_irrelevant(self, source: str, discriminator: str | None) -> None:
        """Record that an envelope matched no known source/type pair."""
        ...

    def normalization_failed(self, kind: SignalKind, error_code: str, reason: str) -> None:
        """Record that a recognized envelope could not be parsed."""
        ...

    def with_context(self, context: ObservationContext) -> NormalizerProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultNormalizerProbe:
    """Default implementation of NormalizerProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultNormalizerProbe:
        """Create a new probe with observation context bound."""
        return DefaultNormalizerProbe(logger=self._logger, context=context)

    def signal_normalized(self, kind: SignalKind) -> None:
        """Record that an envelope produced a signal."""
        self._logger.debug(
            "lifecycle_signal_normalized",
            signal=str(kind),
            **self._get_context_kwargs(),
        )

    def event_irrelevant(self, source: str, discriminator: str | None) -> None:
        """Record that an envelope matched no known source/type pair."""
        self._logger.debug(
            "lifecycle_event_irrelevant",
            source=source,
            discriminator=discriminator,
            **self._get_context_kwargs(),
        )

    def normalization_failed(self, kind: SignalKind, error_code: str, reason: str) -> None:
        """Record that a recognized envelope could not be parsed."""
        self._logger.error(
            "lifecycle_event_normalization_failed",
            signal=str(kind),
            error_code=error_code,
            reason=reason,
            **self._get_context_kwargs(),
        )
