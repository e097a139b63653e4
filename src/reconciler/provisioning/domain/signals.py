"""Lifecycle signals.

A signal is the normalized, source-agnostic form of one upstream lifecycle
event. The three variants form a closed tagged union.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from provisioning.domain.value_objects import SignalKind, TenantAccountKey


@dataclass(frozen=True)
class ProvisionRequested:
    """A provisioning request was accepted for a tenant.

    The only signal that carries the primary key directly.

    Attributes:
        key: Tenant and environment the request was made for
        account_name: Account name chosen for the new account (may be empty)
        raw_status: Provisioning record status as reported upstream
    """

    kind: ClassVar[SignalKind] = SignalKind.PROVISION_REQUESTED

    key: TenantAccountKey
    account_name: str
    raw_status: str


@dataclass(frozen=True)
class AccountCreated:
    """The account factory finished creating (or failed to create) an account.

    Attributes:
        account_id: Cloud account id assigned by the factory
        account_name: Account name chosen during provisioning
        raw_state: Factory state as reported upstream
    """

    kind: ClassVar[SignalKind] = SignalKind.ACCOUNT_CREATED

    account_id: str
    account_name: str
    raw_state: str


@dataclass(frozen=True)
class RoleDeployed:
    """The cross-account role deployment changed status in an account.

    Attributes:
        cloud_account_id: Account the role was deployed to
        raw_status: Deployment status as reported upstream
    """

    kind: ClassVar[SignalKind] = SignalKind.ROLE_DEPLOYED

    cloud_account_id: str
    raw_status: str


# Type alias for every signal the reconciler understands
LifecycleSignal = ProvisionRequested | AccountCreated | RoleDeployed
