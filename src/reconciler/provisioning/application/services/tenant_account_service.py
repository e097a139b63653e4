"""Tenant account registration service.

Registration is the pre-creation step of the provisioning workflow: it
inserts the PENDING/PENDING placeholder record that later lifecycle signals
are reconciled into. It is the only operation that inserts records.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from provisioning.application.observability import (
    DefaultTenantAccountServiceProbe,
    TenantAccountServiceProbe,
)
from provisioning.domain.record import TenantAccountRecord
from provisioning.domain.value_objects import TenantAccountKey
from provisioning.ports.exceptions import DuplicateTenantAccountError
from provisioning.ports.repositories import ITenantAccountStore
from shared_kernel.timestamps import utc_now


class TenantAccountService:
    """Application service for registering and reading tenant accounts."""

    def __init__(
        self,
        store: ITenantAccountStore,
        probe: TenantAccountServiceProbe | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._store = store
        self._probe = probe or DefaultTenantAccountServiceProbe()
        self._clock = clock

    def register(self, tenant_id: str, environment: str) -> TenantAccountRecord:
        """Create the placeholder record for a tenant environment.

        Args:
            tenant_id: Tenant identifier assigned by the tenant-facing system
            environment: One of the known environments ("Prod", "UAT", "Dev")

        Returns:
            The created placeholder record

        Raises:
            ValueError: If the tenant id is empty or the environment unknown
            DuplicateTenantAccountError: If the record already exists; the
                existing record is left unmodified
        """
        key = TenantAccountKey.of(tenant_id, environment)
        record = TenantAccountRecord.placeholder(key, self._clock())

        try:
            self._store.create(record)
        except DuplicateTenantAccountError:
            self._probe.duplicate_tenant_account(key)
            raise

        self._probe.tenant_account_registered(key)
        return record

    def get_tenant_account(
        self, tenant_id: str, environment: str
    ) -> TenantAccountRecord | None:
        """Retrieve the record for a tenant environment, or None."""
        key = TenantAccountKey.of(tenant_id, environment)
        record = self._store.get(key)
        if record is None:
            self._probe.tenant_account_not_found(key)
        return record
