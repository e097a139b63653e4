"""Tenant account record: the unit of reconciled state."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timedelta

from provisioning.domain.value_objects import (
    AccountStatus,
    Environment,
    RoleStatus,
    TenantAccountKey,
)
from shared_kernel.timestamps import format_timestamp

# Resolution of the stored LastModified value
_TIMESTAMP_STEP = timedelta(milliseconds=1)


@dataclass(frozen=True)
class RecordChanges:
    """Attribute changes produced by one transition.

    ``None`` means "leave unchanged". Account id and name may only ever be
    set to a non-empty value; the role ARN may be cleared.
    """

    account_status: str | None = None
    account_id: str | None = None
    account_name: str | None = None
    role_status: str | None = None
    role_arn: str | None = None

    def __post_init__(self) -> None:
        if self.account_id == "":
            raise ValueError("account_id may not be cleared")
        if self.account_name == "":
            raise ValueError("account_name may not be cleared")

    def as_dict(self) -> dict[str, str]:
        """Return only the attributes this change sets."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    @property
    def is_empty(self) -> bool:
        """True when the change would not touch any attribute."""
        return not self.as_dict()


@dataclass(frozen=True)
class TenantAccountRecord:
    """Persistent lifecycle state of one tenant account.

    Business rules:
    - Exactly one record exists per (tenant_id, environment)
    - role_arn is non-empty iff role_status is READY
    - account_id and account_name are never cleared once set
    - every write by the reconciler strictly advances last_modified
    """

    key: TenantAccountKey
    account_status: str
    account_id: str
    account_name: str
    role_status: str
    role_arn: str
    last_modified: datetime
    stored_last_modified: str | None = field(default=None, compare=False, repr=False)

    @property
    def tenant_id(self) -> str:
        """Tenant identifier component of the key."""
        return self.key.tenant_id

    @property
    def environment(self) -> Environment:
        """Environment component of the key."""
        return self.key.environment

    @property
    def role_ready(self) -> bool:
        """True when the cross-account role is deployed and its ARN recorded."""
        return self.role_status == RoleStatus.READY and bool(self.role_arn)

    @classmethod
    def placeholder(cls, key: TenantAccountKey, now: datetime) -> TenantAccountRecord:
        """Factory for the PENDING/PENDING record written before any event.

        Args:
            key: Tenant and environment the account is provisioned for
            now: Creation timestamp

        Returns:
            A record with empty account id, name and role ARN
        """
        return cls(
            key=key,
            account_status=AccountStatus.PENDING.value,
            account_id="",
            account_name="",
            role_status=RoleStatus.PENDING.value,
            role_arn="",
            last_modified=now,
        )

    @property
    def version(self) -> str:
        """LastModified exactly as the store holds it.

        Conditional writes compare against this token, so a value written in
        another ISO form by a different writer still matches.
        """
        return self.stored_last_modified or format_timestamp(self.last_modified)

    def next_modification_time(self, now: datetime) -> datetime:
        """Return the timestamp for the next write.

        Always at least one stored tick after last_modified, so every write
        changes the value concurrent writers condition on, even when the
        clock is behind the record.
        """
        return max(now, self.last_modified + _TIMESTAMP_STEP)

    def with_changes(
        self, changes: RecordChanges, last_modified: datetime
    ) -> TenantAccountRecord:
        """Return a copy with the changes applied and the timestamp advanced."""
        return replace(
            self,
            **changes.as_dict(),
            last_modified=last_modified,
            stored_last_modified=None,
        )
