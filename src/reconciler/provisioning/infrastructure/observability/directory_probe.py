"""Domain probe for account directory lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class AccountDirectoryProbe(Protocol):
    """Domain probe for account directory lookups."""

    def account_described(self, account_id: str) -> None:
        """Record that the directory returned an account."""
        ...

    def account_not_found(self, account_id: str) -> None:
        """Record that the directory does not know the account."""
        ...

    def with_context(self, context: ObservationContext) -> AccountDirectoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultAccountDirectoryProbe:
    """Default implementation of AccountDirectoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultAccountDirectoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultAccountDirectoryProbe(logger=self._logger, context=context)

    def account_described(self, account_id: str) -> None:
        """Record that the directory returned an account."""
        self._logger.debug(
            "directory_account_described",
            account_id=account_id,
            **self._get_context_kwargs(),
        )

    def account_not_found(self, account_id: str) -> None:
        """Record that the directory does not know the account."""
        self._logger.warning(
            "directory_account_not_found",
            account_id=account_id,
            **self._get_context_kwargs(),
        )
