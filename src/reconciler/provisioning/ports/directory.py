"""Directory lookup port.

A read-only query resolving an opaque cloud account identifier to its
human-readable name.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IAccountDirectory(Protocol):
    """Read-only account directory."""

    def resolve_account_name(self, account_id: str) -> str | None:
        """Resolve an account id to its name.

        Args:
            account_id: Cloud account identifier

        Returns:
            The account name, or None if the account is unknown or unnamed
        """
        ...
