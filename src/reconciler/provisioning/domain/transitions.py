"""Transition rules for tenant account records.

A record has two independent status axes, account and role; there is no
single global state. Each signal kind governs exactly the attributes listed
in its rule below, and re-applying a signal to a record it already updated
yields the same attributes.

- ProvisionRequested: account status from the provisioning table, account
  name when provided. Always writes.
- AccountCreated: account id when provided, account status from the
  account-state table. Always writes.
- RoleDeployed: role status from the role table; the role ARN is set when
  the role is READY and cleared otherwise. Skipped entirely when the role is
  already READY with an ARN recorded.

Rules do not enforce forward-only movement on an axis beyond what each rule
encodes.
"""

from __future__ import annotations

from provisioning.domain.record import RecordChanges, TenantAccountRecord
from provisioning.domain.signals import (
    AccountCreated,
    LifecycleSignal,
    ProvisionRequested,
    RoleDeployed,
)
from provisioning.domain.status_mapping import (
    ACCOUNT_STATE_MAPPING,
    PROVISION_STATUS_MAPPING,
    ROLE_STATUS_MAPPING,
)
from provisioning.domain.value_objects import RoleArnConvention, RoleStatus


def plan_transition(
    record: TenantAccountRecord,
    signal: LifecycleSignal,
    role_convention: RoleArnConvention,
) -> RecordChanges | None:
    """Compute the changes a signal makes to a correlated record.

    Args:
        record: The record the signal was correlated to
        signal: The lifecycle signal being applied
        role_convention: Convention used to build the role ARN

    Returns:
        The changes to write, or None when no write is needed
    """
    match signal:
        case ProvisionRequested():
            return _plan_provision_requested(signal)
        case AccountCreated():
            return _plan_account_created(signal)
        case RoleDeployed():
            return _plan_role_deployed(record, signal, role_convention)
        case _:
            raise TypeError(f"Unsupported signal: {type(signal).__name__}")


def _plan_provision_requested(signal: ProvisionRequested) -> RecordChanges:
    return RecordChanges(
        account_status=PROVISION_STATUS_MAPPING.map(signal.raw_status),
        account_name=signal.account_name or None,
    )


def _plan_account_created(signal: AccountCreated) -> RecordChanges:
    return RecordChanges(
        account_id=signal.account_id or None,
        account_status=ACCOUNT_STATE_MAPPING.map(signal.raw_state),
    )


def _plan_role_deployed(
    record: TenantAccountRecord,
    signal: RoleDeployed,
    role_convention: RoleArnConvention,
) -> RecordChanges | None:
    role_status = ROLE_STATUS_MAPPING.map(signal.raw_status)

    if role_status != RoleStatus.READY:
        return RecordChanges(role_status=role_status, role_arn="")

    # Redelivered "already current" events
    if record.role_ready:
        return None

    return RecordChanges(
        role_status=role_status,
        role_arn=role_convention.arn_for(signal.cloud_account_id),
    )
