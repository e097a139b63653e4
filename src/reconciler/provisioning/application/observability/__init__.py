"""Domain-Oriented Observability for the provisioning application layer."""

from provisioning.application.observability.correlator_probe import (
    CorrelatorProbe,
    DefaultCorrelatorProbe,
)
from provisioning.application.observability.invocation_probe import (
    DefaultInvocationProbe,
    InvocationProbe,
)
from provisioning.application.observability.reconciliation_service_probe import (
    DefaultReconciliationServiceProbe,
    ReconciliationServiceProbe,
)
from provisioning.application.observability.tenant_account_service_probe import (
    DefaultTenantAccountServiceProbe,
    TenantAccountServiceProbe,
)

__all__ = [
    "CorrelatorProbe",
    "DefaultCorrelatorProbe",
    "InvocationProbe",
    "DefaultInvocationProbe",
    "ReconciliationServiceProbe",
    "DefaultReconciliationServiceProbe",
    "TenantAccountServiceProbe",
    "DefaultTenantAccountServiceProbe",
]
