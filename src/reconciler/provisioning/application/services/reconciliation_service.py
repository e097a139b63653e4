"""Reconciliation service: applies lifecycle signals to tenant account records.

Every write is a read-then-conditional-write. The record returned by the
correlator is the read; the update is conditioned on its last_modified value,
so a writer that raced another invocation on the same record fails with
StoreWriteConflictError instead of silently overwriting the other's changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from provisioning.application.correlator import Correlator
from provisioning.application.observability import (
    DefaultReconciliationServiceProbe,
    ReconciliationServiceProbe,
)
from provisioning.domain.record import RecordChanges, TenantAccountRecord
from provisioning.domain.signals import LifecycleSignal
from provisioning.domain.transitions import plan_transition
from provisioning.domain.value_objects import (
    RoleArnConvention,
    SignalKind,
    TenantAccountKey,
)
from provisioning.ports.exceptions import StoreWriteConflictError
from provisioning.ports.repositories import ITenantAccountStore
from shared_kernel.timestamps import utc_now


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Result of reconciling one signal.

    Attributes:
        signal_kind: Kind of the signal applied
        key: Key of the record it was correlated to
        applied: False when the transition rules required no write
        record: The record after the signal (unchanged when not applied)
        changes: The attributes written, if any
    """

    signal_kind: SignalKind
    key: TenantAccountKey
    applied: bool
    record: TenantAccountRecord
    changes: RecordChanges | None = None


class ReconciliationService:
    """Correlates a signal, plans its transition and writes it conditionally."""

    def __init__(
        self,
        store: ITenantAccountStore,
        correlator: Correlator,
        role_convention: RoleArnConvention | None = None,
        probe: ReconciliationServiceProbe | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize ReconciliationService with dependencies.

        Args:
            store: State store holding tenant account records
            correlator: Resolves signals to records
            role_convention: Naming convention for the cross-account role
            probe: Optional domain probe for observability
            clock: Source of write timestamps
        """
        self._store = store
        self._correlator = correlator
        self._role_convention = role_convention or RoleArnConvention()
        self._probe = probe or DefaultReconciliationServiceProbe()
        self._clock = clock

    def reconcile(self, signal: LifecycleSignal) -> ReconciliationOutcome:
        """Apply one signal to the record it correlates to.

        Args:
            signal: The normalized lifecycle signal

        Returns:
            The outcome, with applied=False when no write was needed

        Raises:
            RecordNotFoundError: If no record matches the signal
            AmbiguousCorrelationError: If several records match the signal
            StoreWriteConflictError: If the record changed since it was read
        """
        record = self._correlator.correlate(signal)
        changes = plan_transition(record, signal, self._role_convention)

        if changes is None:
            self._probe.signal_skipped(signal.kind, record.key)
            return ReconciliationOutcome(
                signal_kind=signal.kind,
                key=record.key,
                applied=False,
                record=record,
            )

        try:
            updated = self._store.update(
                record.key,
                changes,
                last_modified=record.next_modification_time(self._clock()),
                expected_version=record.version,
            )
        except StoreWriteConflictError:
            self._probe.write_conflict(signal.kind, record.key)
            raise

        self._probe.signal_applied(signal.kind, record.key, changes)
        return ReconciliationOutcome(
            signal_kind=signal.kind,
            key=record.key,
            applied=True,
            record=updated,
            changes=changes,
        )
