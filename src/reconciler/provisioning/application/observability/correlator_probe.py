"""Protocol for correlator observability.

Defines the interface for domain probes that capture how lifecycle signals
are matched to tenant account records.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from provisioning.domain.value_objects import TenantAccountKey
    from shared_kernel.observability_context import ObservationContext


class CorrelatorProbe(Protocol):
    """Domain probe for signal correlation."""

    def record_matched(self, key: TenantAccountKey, matched_on: str) -> None:
        """Record that a signal was correlated to exactly one record."""
        ...

    def record_not_found(self, matched_on: str, value: str) -> None:
        """Record that no record matched a signal."""
        ...

    def ambiguous_correlation(
        self, account_name: str, candidates: tuple[TenantAccountKey, ...]
    ) -> None:
        """Record that several records share the correlating account name."""
        ...

    def account_name_resolved(self, account_id: str, account_name: str) -> None:
        """Record that the directory resolved an account id to a name."""
        ...

    def account_name_unresolved(self, account_id: str) -> None:
        """Record that the directory could not resolve an account id."""
        ...

    def with_context(self, context: ObservationContext) -> CorrelatorProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultCorrelatorProbe:
    """Default implementation of CorrelatorProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultCorrelatorProbe:
        """Create a new probe with observation context bound."""
        return DefaultCorrelatorProbe(logger=self._logger, context=context)

    def record_matched(self, key: TenantAccountKey, matched_on: str) -> None:
        """Record that a signal was correlated to exactly one record."""
        self._logger.debug(
            "tenant_account_matched",
            tenant_id=key.tenant_id,
            environment=str(key.environment),
            matched_on=matched_on,
            **self._get_context_kwargs(),
        )

    def record_not_found(self, matched_on: str, value: str) -> None:
        """Record that no record matched a signal."""
        self._logger.warning(
            "tenant_account_not_found",
            matched_on=matched_on,
            value=value,
            **self._get_context_kwargs(),
        )

    def ambiguous_correlation(
        self, account_name: str, candidates: tuple[TenantAccountKey, ...]
    ) -> None:
        """Record an integrity violation that needs an operator.

        Logged at critical with alert=True so log-based alarms can page on it.
        """
        self._logger.critical(
            "ambiguous_tenant_account_correlation",
            account_name=account_name,
            candidate_count=len(candidates),
            candidates=[str(key) for key in candidates],
            alert=True,
            **self._get_context_kwargs(),
        )

    def account_name_resolved(self, account_id: str, account_name: str) -> None:
        """Record that the directory resolved an account id to a name."""
        self._logger.debug(
            "account_name_resolved",
            account_id=account_id,
            account_name=account_name,
            **self._get_context_kwargs(),
        )

    def account_name_unresolved(self, account_id: str) -> None:
        """Record that the directory could not resolve an account id."""
        self._logger.warning(
            "account_name_unresolved",
            account_id=account_id,
            **self._get_context_kwargs(),
        )
