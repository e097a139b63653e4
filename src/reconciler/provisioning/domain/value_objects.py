"""Value objects for the provisioning domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shared_kernel.resource_identifiers import format_role_arn

_PARTITION_PREFIX = "PS#"
_SORT_PREFIX = "ENV#"


class Environment(StrEnum):
    """Closed set of tenant environments an account is provisioned for."""

    PROD = "Prod"
    UAT = "UAT"
    DEV = "Dev"


class AccountStatus(StrEnum):
    """Canonical account statuses.

    Raw upstream statuses outside this set are stored verbatim, so record
    fields hold plain strings rather than members of this enum.
    """

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    READY = "READY"
    FAILED = "FAILED"


class RoleStatus(StrEnum):
    """Canonical cross-account role statuses (raw values pass through)."""

    PENDING = "PENDING"
    READY = "READY"


class SignalKind(StrEnum):
    """Discriminator of the three lifecycle signal variants."""

    PROVISION_REQUESTED = "ProvisionRequested"
    ACCOUNT_CREATED = "AccountCreated"
    ROLE_DEPLOYED = "RoleDeployed"


@dataclass(frozen=True)
class TenantAccountKey:
    """Primary key of a tenant account record.

    Immutable once the record is created. The storage form prefixes each
    component ("PS#<tenant>", "ENV#<environment>").
    """

    tenant_id: str
    environment: Environment

    def __str__(self) -> str:
        """Return string representation."""
        return f"{self.tenant_id}/{self.environment}"

    @classmethod
    def of(cls, tenant_id: str, environment: str) -> TenantAccountKey:
        """Create a key from raw strings.

        Raises:
            ValueError: If the tenant id is empty or the environment is not
                one of the known environments
        """
        if not tenant_id:
            raise ValueError("tenant_id must not be empty")
        try:
            env = Environment(environment)
        except ValueError as e:
            raise ValueError(f"Unknown environment: {environment!r}") from e
        return cls(tenant_id=tenant_id, environment=env)

    @property
    def partition_key(self) -> str:
        """Storage partition key."""
        return f"{_PARTITION_PREFIX}{self.tenant_id}"

    @property
    def sort_key(self) -> str:
        """Storage sort key."""
        return f"{_SORT_PREFIX}{self.environment}"

    @classmethod
    def from_storage(cls, partition_key: str, sort_key: str) -> TenantAccountKey:
        """Rebuild a key from its storage form.

        Raises:
            ValueError: If either component lacks its prefix
        """
        if not partition_key.startswith(_PARTITION_PREFIX) or not sort_key.startswith(
            _SORT_PREFIX
        ):
            raise ValueError(f"Unrecognised storage key: {partition_key!r}/{sort_key!r}")
        return cls.of(
            partition_key.removeprefix(_PARTITION_PREFIX),
            sort_key.removeprefix(_SORT_PREFIX),
        )


@dataclass(frozen=True)
class RoleArnConvention:
    """Naming convention of the cross-account role deployed to each account."""

    role_name: str = "PageSuiteRole"
    partition: str = "aws"

    def arn_for(self, account_id: str) -> str:
        """Return the role ARN for the given cloud account."""
        return format_role_arn(self.partition, account_id, self.role_name)
