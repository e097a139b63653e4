"""Domain exceptions for the provisioning context.

Every failure that ends the processing of a single event derives from
ReconciliationError and carries a stable ``code`` used in structured reports.
None of them is retried inside the reconciler; ``transient`` marks the ones a
transport redelivery can plausibly cure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from provisioning.domain.value_objects import TenantAccountKey


class ReconciliationError(Exception):
    """Base exception for failures that drop a lifecycle event."""

    code: ClassVar[str] = "ReconciliationError"
    transient: ClassVar[bool] = False


class CorrelationKeyMissingError(ReconciliationError):
    """Raised when an event lacks a field required to correlate it.

    The upstream never redelivers a corrected payload, so the event is
    dropped after being reported.
    """

    code = "CorrelationKeyMissing"

    def __init__(self, message: str, missing: tuple[str, ...] = ()):
        super().__init__(message)
        self.missing = missing


class MalformedResourceIdError(ReconciliationError):
    """Raised when a resource identifier does not decompose as expected."""

    code = "MalformedResourceId"

    def __init__(self, message: str, resource_id: str):
        super().__init__(message)
        self.resource_id = resource_id


class RecordNotFoundError(ReconciliationError):
    """Raised when no tenant account record matches a signal.

    Usually an ordering race: the event arrived before the attribute it
    correlates on was persisted.
    """

    code = "RecordNotFound"
    transient = True


class AmbiguousCorrelationError(ReconciliationError):
    """Raised when more than one record shares the correlating account name.

    This is a data-integrity violation, not a race. No record is updated.
    """

    code = "AmbiguousCorrelation"

    def __init__(
        self,
        message: str,
        account_name: str,
        candidates: tuple[TenantAccountKey, ...],
    ):
        super().__init__(message)
        self.account_name = account_name
        self.candidates = candidates
