"""Protocol for tenant account registration observability."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from provisioning.domain.value_objects import TenantAccountKey
    from shared_kernel.observability_context import ObservationContext


class TenantAccountServiceProbe(Protocol):
    """Domain probe for tenant account registration."""

    def tenant_account_registered(self, key: TenantAccountKey) -> None:
        """Record that a placeholder record was created."""
        ...

    def duplicate_tenant_account(self, key: TenantAccountKey) -> None:
        """Record that registration found the key already taken."""
        ...

    def tenant_account_not_found(self, key: TenantAccountKey) -> None:
        """Record that a lookup by key found nothing."""
        ...

    def with_context(self, context: ObservationContext) -> TenantAccountServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTenantAccountServiceProbe:
    """Default implementation of TenantAccountServiceProbe using structlog."""

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
    ) -> DefaultTenantAccountServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTenantAccountServiceProbe(logger=self._logger, context=context)

    def tenant_account_registered(self, key: TenantAccountKey) -> None:
        """Record that a placeholder record was created."""
        self._logger.info(
            "tenant_account_registered",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def duplicate_tenant_account(self, key: TenantAccountKey) -> None:
        """Record that registration found the key already taken."""
        self._logger.warning(
            "duplicate_tenant_account",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )

    def tenant_account_not_found(self, key: TenantAccountKey) -> None:
        """Record that a lookup by key found nothing."""
        self._logger.debug(
            "tenant_account_not_found",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            **self._get_context_kwargs(),
        )
