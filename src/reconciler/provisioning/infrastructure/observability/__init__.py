"""Domain-Oriented Observability for provisioning infrastructure adapters."""

from provisioning.infrastructure.observability.directory_probe import (
    AccountDirectoryProbe,
    DefaultAccountDirectoryProbe,
)
from provisioning.infrastructure.observability.normalizer_probe import (
    DefaultNormalizerProbe,
    NormalizerProbe,
)
from provisioning.infrastructure.observability.store_probe import (
    DefaultTenantAccountStoreProbe,
    TenantAccountStoreProbe,
)

__all__ = [
    "AccountDirectoryProbe",
    "DefaultAccountDirectoryProbe",
    "NormalizerProbe",
    "DefaultNormalizerProbe",
    "TenantAccountStoreProbe",
    "DefaultTenantAccountStoreProbe",
]
