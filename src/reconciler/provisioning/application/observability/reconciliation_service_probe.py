"""Protocol for reconciliation service observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from provisioning.domain.record import RecordChanges
    from provisioning.domain.value_objects import SignalKind, TenantAccountKey
    from shared_kernel.observability_context import ObservationContext


class ReconciliationServiceProbe(Protocol):
    """Domain probe for applying signals to tenant account records."""

    def signal_applied(
        self, kind: SignalKind, key: TenantAccountKey, changes: RecordChanges
    ) -> None:
        """Record that a signal's changes were written."""
        ...

    def signal_skipped(self, kind: SignalKind, key: TenantAccountKey) -> None:
        """Record that a signal needed no write."""
        ...

    def write_conflict(self, kind: SignalKind, key: TenantAccountKey) -> None:
        """Record that a conditional write lost to a concurrent writer."""
        ...

    def with_context(self, context: ObservationContext) -> ReconciliationServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultReconciliationServiceProbe:
    """Default implementation of ReconciliationServiceProbe using structlog."""

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

    def with_context(
        self, context: ObservationContext
    ) -> DefaultReconciliationServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultReconciliationServiceProbe(logger=self._logger, context=context)

    def signal_applied(
        self, kind: SignalKind, key: TenantAccountKey, changes: RecordChanges
    ) -> None:
        """Record that a signal's changes were written."""
        self._logger.info(
            "lifecycle_signal_applied",
            signal=str(kind),
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            changes=changes.as_dict(),
            **self._get_context_kwargs(),
        )

    def signal_skipped(self, kind: SignalKind, key: TenantAccountKey) -> None:
        """Record that a signal needed no write."""
        self._logger.info(
            "lifecycle_signal_skipped",
            signal=str(kind),
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def write_conflict(self, kind: SignalKind, key: TenantAccountKey) -> None:
        """Record that a conditional write lost to a concurrent writer."""
        self._logger.warning(
            "tenant_account_write_conflict",
            signal=str(kind),
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )
