"""Exceptions raised by state store adapters.

These represent violations of the store's conditional-write contract. They
should be caught and reported by the application layer.
"""

from provisioning.domain.exceptions import ReconciliationError


class DuplicateTenantAccountError(ReconciliationError):
    """Raised when creating a record whose key already exists.

    The existing record is left untouched; creation never overwrites.
    """

    code = "DuplicateTenantAccount"


class StoreWriteConflictError(ReconciliationError):
    """Raised when a conditional update finds the record changed or gone.

    The writer lost a race against a concurrent writer. A redelivery of the
    same upstream event re-reads the record and tries again.
    """

    code = "StoreWriteConflict"
    transient = True
