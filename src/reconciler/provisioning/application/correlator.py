"""Correlation of lifecycle signals to tenant account records.

Only ProvisionRequested carries the primary key. The other two signals are
matched on the account name, which ProvisionRequested persisted earlier; for
RoleDeployed the name is first resolved from the cloud account id through the
account directory.
"""

from __future__ import annotations

from provisioning.application.observability import (
    CorrelatorProbe,
    DefaultCorrelatorProbe,
)
from provisioning.domain.exceptions import (
    AmbiguousCorrelationError,
    RecordNotFoundError,
)
from provisioning.domain.record import TenantAccountRecord
from provisioning.domain.signals import (
    AccountCreated,
    LifecycleSignal,
    ProvisionRequested,
    RoleDeployed,
)
from provisioning.ports.directory import IAccountDirectory
from provisioning.ports.repositories import ITenantAccountStore

_ACCOUNT_NAME = "account_name"


class Correlator:
    """Resolves a signal to exactly one TenantAccountRecord, or fails."""

    def __init__(
        self,
        store: ITenantAccountStore,
        directory: IAccountDirectory,
        probe: CorrelatorProbe | None = None,
    ) -> None:
        """Initialize the correlator.

        Args:
            store: State store to look records up in
            directory: Directory used to resolve account names
            probe: Optional domain probe for observability
        """
        self._store = store
        self._directory = directory
        self._probe = probe or DefaultCorrelatorProbe()

    def correlate(self, signal: LifecycleSignal) -> TenantAccountRecord:
        """Find the record a signal applies to.

        Args:
            signal: The lifecycle signal to correlate

        Returns:
            The single matching record

        Raises:
            RecordNotFoundError: If nothing matches, or the directory cannot
                resolve the signal's account id
            AmbiguousCorrelationError: If several records share the account name
        """
        match signal:
            case ProvisionRequested():
                return self._match_key(signal)
            case AccountCreated():
                return self._match_account_name(signal.account_name)
            case RoleDeployed():
                account_name = self._resolve_account_name(signal.cloud_account_id)
                return self._match_account_name(account_name)
            case _:
                raise TypeError(f"Unsupported signal: {type(signal).__name__}")

    def _match_key(self, signal: ProvisionRequested) -> TenantAccountRecord:
        record = self._store.get(signal.key)
        if record is None:
            self._probe.record_not_found("key", str(signal.key))
            raise RecordNotFoundError(f"No tenant account record for {signal.key}")
        self._probe.record_matched(record.key, "key")
        return record

    def _resolve_account_name(self, account_id: str) -> str:
        account_name = self._directory.resolve_account_name(account_id)
        if not account_name:
            self._probe.account_name_unresolved(account_id)
            raise RecordNotFoundError(
                f"Could not resolve an account name for account {account_id}"
            )
        self._probe.account_name_resolved(account_id, account_name)
        return account_name

    def _match_account_name(self, account_name: str) -> TenantAccountRecord:
        matches = self._store.scan_by_attribute(_ACCOUNT_NAME, account_name)

        if not matches:
            self._probe.record_not_found(_ACCOUNT_NAME, account_name)
            raise RecordNotFoundError(
                f"No tenant account record with account name {account_name!r}"
            )

        if len(matches) > 1:
            candidates = tuple(sorted((r.key for r in matches), key=str))
            self._probe.ambiguous_correlation(account_name, candidates)
            raise AmbiguousCorrelationError(
                f"Found {len(matches)} records for account name {account_name!r}, "
                "expected exactly 1",
                account_name=account_name,
                candidates=candidates,
            )

        record = matches[0]
        self._probe.record_matched(record.key, _ACCOUNT_NAME)
        return record
