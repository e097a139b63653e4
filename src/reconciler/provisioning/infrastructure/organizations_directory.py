"""Account directory adapters.

The production directory is AWS Organizations, queried from the management
account. A static mapping serves local runs and tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from botocore.exceptions import ClientError

from provisioning.infrastructure.observability import (
    AccountDirectoryProbe,
    DefaultAccountDirectoryProbe,
)

_ACCOUNT_NOT_FOUND = "AccountNotFoundException"


class OrganizationsAccountDirectory:
    """Resolves account names with organizations:DescribeAccount."""

    def __init__(
        self,
        client: Any,
        probe: AccountDirectoryProbe | None = None,
    ) -> None:
        """Initialize the directory.

        Args:
            client: boto3 Organizations client
            probe: Optional domain probe for observability
        """
        self._client = client
        self._probe = probe or DefaultAccountDirectoryProbe()

    def resolve_account_name(self, account_id: str) -> str | None:
        """Return the account's name, or None if Organizations does not know it.

        Other client errors (throttling beyond the retry budget, access denied)
        propagate.
        """
        try:
            response = self._client.describe_account(AccountId=account_id)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") == _ACCOUNT_NOT_FOUND:
                self._probe.account_not_found(account_id)
                return None
            raise

        self._probe.account_described(account_id)
        return response.get("Account", {}).get("Name") or None


class StaticAccountDirectory:
    """Directory backed by a fixed account id -> name mapping."""

    def __init__(self, names: Mapping[str, str] | None = None) -> None:
        self._names = dict(names or {})

    def resolve_account_name(self, account_id: str) -> str | None:
        return self._names.get(account_id) or None
