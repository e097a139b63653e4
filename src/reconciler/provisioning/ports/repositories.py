"""Repository protocols (ports) for the provisioning context.

The state store is a key-value store offering conditional create,
conditional update, exact-key lookups and attribute-filtered scans. All
coordination between concurrent invocations happens through its
conditional-write contract.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from provisioning.domain.record import RecordChanges, TenantAccountRecord
from provisioning.domain.value_objects import TenantAccountKey


@runtime_checkable
class ITenantAccountStore(Protocol):
    """Persistence of TenantAccountRecord values."""

    def create(self, record: TenantAccountRecord) -> None:
        """Insert a new record.

        Args:
            record: The record to insert

        Raises:
            DuplicateTenantAccountError: If a record with the same key exists
        """
        ...

    def get(self, key: TenantAccountKey) -> TenantAccountRecord | None:
        """Retrieve a record by its exact key.

        Args:
            key: Tenant and environment of the record

        Returns:
            The record, or None if not found
        """
        ...

    def update(
        self,
        key: TenantAccountKey,
        changes: RecordChanges,
        last_modified: datetime,
        expected_version: str,
    ) -> TenantAccountRecord:
        """Apply changes if the stored record is still the one last read.

        Args:
            key: Tenant and environment of the record
            changes: Attributes to set
            last_modified: Timestamp to store with the write
            expected_version: Version of the record read before computing
                the changes (TenantAccountRecord.version)

        Returns:
            The record as stored after the write

        Raises:
            StoreWriteConflictError: If the record is gone or its
                stored LastModified no longer equals expected_version
        """
        ...

    def scan_by_attribute(self, attribute: str, value: str) -> list[TenantAccountRecord]:
        """Return every record whose attribute equals value.

        Args:
            attribute: TenantAccountRecord field name (e.g. "account_name")
            value: Value to compare against

        Returns:
            All matching records, in no particular order

        Raises:
            ValueError: If the attribute is not a scannable record field
        """
        ...
