"""In-memory implementation of the tenant account store.

Honours the same conditional-write contract as the DynamoDB adapter. Used
for local runs (RECONCILER_STORE_BACKEND=memory) and tests.
"""

from __future__ import annotations

import copy
import threading
from dataclasses import fields
from datetime import datetime

from provisioning.domain.record import RecordChanges, TenantAccountRecord
from provisioning.domain.value_objects import TenantAccountKey
from provisioning.infrastructure.observability import (
    DefaultTenantAccountStoreProbe,
    TenantAccountStoreProbe,
)
from provisioning.ports.exceptions import (
    DuplicateTenantAccountError,
    StoreWriteConflictError,
)
from shared_kernel.observability_context import ObservationContext

_SCANNABLE_FIELDS = frozenset(f.name for f in fields(RecordChanges))


class InMemoryTenantAccountStore:
    """Dict-backed tenant account store guarded by a lock."""

    def __init__(
        self,
        records: list[TenantAccountRecord] | None = None,
        probe: TenantAccountStoreProbe | None = None,
    ) -> None:
        self._records: dict[TenantAccountKey, TenantAccountRecord] = {
            record.key: record for record in records or []
        }
        self._lock = threading.Lock()
        self._probe = probe or DefaultTenantAccountStoreProbe()

    def with_context(self, context: ObservationContext) -> InMemoryTenantAccountStore:
        """Return a view over the same records whose probe is bound to context."""
        view = copy.copy(self)
        view._probe = self._probe.with_context(context)
        return view

    def create(self, record: TenantAccountRecord) -> None:
        with self._lock:
            if record.key in self._records:
                self._probe.duplicate_record(record.key)
                raise DuplicateTenantAccountError(
                    f"Tenant account {record.key} already exists"
                )
            self._records[record.key] = record
        self._probe.record_created(record.key)

    def get(self, key: TenantAccountKey) -> TenantAccountRecord | None:
        with self._lock:
            record = self._records.get(key)
        if record is not None:
            self._probe.record_retrieved(key)
        return record

    def update(
        self,
        key: TenantAccountKey,
        changes: RecordChanges,
        last_modified: datetime,
        expected_version: str,
    ) -> TenantAccountRecord:
        with self._lock:
            current = self._records.get(key)
            if current is None or current.version != expected_version:
                self._probe.update_precondition_failed(key)
                raise StoreWriteConflictError(
                    f"Tenant account {key} changed or disappeared since it was read"
                )
            updated = current.with_changes(changes, last_modified)
            self._records[key] = updated

        self._probe.record_updated(key, sorted(changes.as_dict()))
        return updated

    def scan_by_attribute(self, attribute: str, value: str) -> list[TenantAccountRecord]:
        if attribute not in _SCANNABLE_FIELDS:
            raise ValueError(f"Cannot scan on attribute: {attribute!r}")

        with self._lock:
            matches = [
                record
                for record in self._records.values()
                if getattr(record, attribute) == value
            ]
        self._probe.records_scanned(attribute, len(matches))
        return matches
