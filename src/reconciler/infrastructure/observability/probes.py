"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AWSClientProbe(Protocol):
    """Domain probe for AWS SDK client construction."""

    def client_created(self, service: str, region: str | None) -> None:
        """Record that an AWS service client was constructed."""
        ...

    def with_context(self, context: ObservationContext) -> AWSClientProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAWSClientProbe:
    """Default implementation of AWSClientProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAWSClientProbe:
        """Create a new probe with observation context bound."""
        return DefaultAWSClientProbe(logger=self._logger, context=context)

    def client_created(self, service: str, region: str | None) -> None:
        """Record that an AWS service client was constructed."""
        self._logger.debug(
            "aws_client_created",
            service=service,
            region=region,
            **self._get_context_kwargs(),
        )
