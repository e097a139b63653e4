"""Construction of provisioning ports and services from settings.

Ports and services are built per invocation with the invocation's observation
context bound to their probes. The in-memory store is shared by the process;
each invocation gets a view of it bound to its own context.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from infrastructure.aws import AWSClientFactory
from infrastructure.observability import DefaultAWSClientProbe
from infrastructure.settings import (
    DirectorySettings,
    ProvisioningSettings,
    StoreSettings,
)
from provisioning.application.correlator import Correlator
from provisioning.application.observability import (
    DefaultCorrelatorProbe,
    DefaultReconciliationServiceProbe,
    DefaultTenantAccountServiceProbe,
)
from provisioning.application.services import (
    ReconciliationService,
    TenantAccountService,
)
from provisioning.domain.value_objects import RoleArnConvention
from provisioning.infrastructure.dynamodb_store import DynamoDBTenantAccountStore
from provisioning.infrastructure.events.normalizer import LifecycleEventNormalizer
from provisioning.infrastructure.memory_store import InMemoryTenantAccountStore
from provisioning.infrastructure.observability import (
    DefaultAccountDirectoryProbe,
    DefaultNormalizerProbe,
    DefaultTenantAccountStoreProbe,
)
from provisioning.infrastructure.organizations_directory import (
    OrganizationsAccountDirectory,
    StaticAccountDirectory,
)
from provisioning.ports import IAccountDirectory, ITenantAccountStore
from shared_kernel.observability_context import ObservationContext


def _bind(probe: Any, context: ObservationContext | None) -> Any:
    """Bind the invocation context to a probe, if there is one."""
    if context is None:
        return probe
    return probe.with_context(context)


@lru_cache
def get_memory_store() -> InMemoryTenantAccountStore:
    """Get the process-wide in-memory store.

    Cached so records survive across invocations of one local process.
    """
    return InMemoryTenantAccountStore()


def get_tenant_account_store(
    settings: StoreSettings,
    context: ObservationContext | None = None,
    clients: AWSClientFactory | None = None,
) -> ITenantAccountStore:
    """Get the tenant account store selected by settings.

    Args:
        settings: Store settings
        context: Observation context of the current invocation
        clients: Optional AWS client factory (defaults to one built from settings)

    Returns:
        A DynamoDB store, or a view of the shared in-memory store
    """
    if settings.backend == "memory":
        store = get_memory_store()
        return store if context is None else store.with_context(context)

    clients = clients or AWSClientFactory(
        settings, probe=_bind(DefaultAWSClientProbe(), context)
    )
    return DynamoDBTenantAccountStore(
        client=clients.dynamodb(),
        table_name=settings.table_name,
        probe=_bind(DefaultTenantAccountStoreProbe(), context),
    )


def get_account_directory(
    settings: DirectorySettings,
    store_settings: StoreSettings,
    context: ObservationContext | None = None,
    clients: AWSClientFactory | None = None,
) -> IAccountDirectory:
    """Get the account directory selected by settings.

    Args:
        settings: Directory settings
        store_settings: Store settings supplying region and retry policy
        context: Observation context of the current invocation
        clients: Optional AWS client factory (defaults to one built from settings)

    Returns:
        An Organizations-backed or static directory
    """
    if settings.backend == "static":
        return StaticAccountDirectory(settings.account_names)

    clients = clients or AWSClientFactory(
        store_settings, probe=_bind(DefaultAWSClientProbe(), context)
    )
    return OrganizationsAccountDirectory(
        client=clients.organizations(),
        probe=_bind(DefaultAccountDirectoryProbe(), context),
    )


def get_event_normalizer(
    settings: ProvisioningSettings,
    context: ObservationContext | None = None,
) -> LifecycleEventNormalizer:
    """Get a LifecycleEventNormalizer bound to the invocation context."""
    return LifecycleEventNormalizer(
        settings=settings,
        probe=_bind(DefaultNormalizerProbe(), context),
    )


def get_reconciliation_service(
    store: ITenantAccountStore,
    directory: IAccountDirectory,
    settings: ProvisioningSettings,
    context: ObservationContext | None = None,
) -> ReconciliationService:
    """Get a ReconciliationService wired to the given ports.

    Args:
        store: Tenant account store
        directory: Account directory
        settings: Provisioning conventions (role name and partition)
        context: Observation context of the current invocation

    Returns:
        ReconciliationService instance
    """
    correlator = Correlator(
        store=store,
        directory=directory,
        probe=_bind(DefaultCorrelatorProbe(), context),
    )
    return ReconciliationService(
        store=store,
        correlator=correlator,
        role_convention=RoleArnConvention(
            role_name=settings.role_name,
            partition=settings.role_partition,
        ),
        probe=_bind(DefaultReconciliationServiceProbe(), context),
    )


def get_tenant_account_service(
    store: ITenantAccountStore,
    context: ObservationContext | None = None,
) -> TenantAccountService:
    """Get a TenantAccountService wired to the given store."""
    return TenantAccountService(
        store=store,
        probe=_bind(DefaultTenantAccountServiceProbe(), context),
    )
