"""Domain probe for tenant account store operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events of the state store adapters.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from provisioning.domain.value_objects import TenantAccountKey
    from shared_kernel.observability_context import ObservationContext


class TenantAccountStoreProbe(Protocol):
    """Domain probe for tenant account store operations."""

    def record_created(self, key: TenantAccountKey) -> None:
        """Record that a record was inserted."""
        ...

    def duplicate_record(self, key: TenantAccountKey) -> None:
        """Record that an insert found the key already present."""
        ...

    def record_retrieved(self, key: TenantAccountKey) -> None:
        """Record that a record was read by key."""
        ...

    def record_updated(self, key: TenantAccountKey, attributes: list[str]) -> None:
        """Record that a conditional update succeeded."""
        ...

    def update_precondition_failed(self, key: TenantAccountKey) -> None:
        """Record that a conditional update found the record changed or gone."""
        ...

    def records_scanned(self, attribute: str, match_count: int) -> None:
        """Record the result of an attribute-filtered scan."""
        ...

    def with_context(self, context: ObservationContext) -> TenantAccountStoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantAccountStoreProbe:
    """Default implementation of TenantAccountStoreProbe using structlog."""

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
    ) -> DefaultTenantAccountStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantAccountStoreProbe(logger=self._logger, context=context)

    def record_created(self, key: TenantAccountKey) -> None:
        """Record that a record was inserted."""
        self._logger.info(
            "tenant_account_record_created",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def duplicate_record(self, key: TenantAccountKey) -> None:
        """Record that an insert found the key already present."""
        self._logger.warning(
            "tenant_account_record_exists",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def record_retrieved(self, key: TenantAccountKey) -> None:
        """Record that a record was read by key."""
        self._logger.debug(
            "tenant_account_record_retrieved",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def record_updated(self, key: TenantAccountKey, attributes: list[str]) -> None:
        """Record that a conditional update succeeded."""
        self._logger.debug(
            "tenant_account_record_updated",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            attributes=attributes,
            **self._get_context_kwargs(),
        )

    def update_precondition_failed(self, key: TenantAccountKey) -> None:
        """Record that a conditional update found the record changed or gone."""
        self._logger.warning(
            "tenant_account_update_precondition_failed",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def records_scanned(self, attribute: str, match_count: int) -> None:
        """Record the result of an attribute-filtered scan."""
        self._logger.debug(
            "tenant_account_records_scanned",
            attribute=attribute,
            match_count=match_count,
            **self._get_context_kwargs(),
        )
