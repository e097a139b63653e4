"""Application services for the provisioning context."""

from provisioning.application.services.reconciliation_service import (
    ReconciliationOutcome,
    ReconciliationService,
)
from provisioning.application.services.tenant_account_service import (
    TenantAccountService,
)

__all__ = [
    "ReconciliationOutcome",
    "ReconciliationService",
    "TenantAccountService",
]
