"""Raw-to-canonical status mapping tables, one per signal kind.

Each table is finite and explicit; any raw value it does not list is stored
verbatim. Keeping the remaps here rather than inline in the transition rules
makes them auditable on their own.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from provisioning.domain.value_objects import AccountStatus, RoleStatus, SignalKind


@dataclass(frozen=True)
class StatusMapping:
    """A finite raw-status remapping with passthrough fallback."""

    kind: SignalKind
    table: Mapping[str, str]

    def map(self, raw_status: str) -> str:
        """Return the canonical status for a raw upstream status."""
        return self.table.get(raw_status, raw_status)


# "CREATED" only means the provisioning request was accepted, not that the
# account exists.
PROVISION_STATUS_MAPPING = StatusMapping(
    kind=SignalKind.PROVISION_REQUESTED,
    table=MappingProxyType({"CREATED": AccountStatus.IN_PROGRESS.value}),
)

ACCOUNT_STATE_MAPPING = StatusMapping(
    kind=SignalKind.ACCOUNT_CREATED,
    table=MappingProxyType({"SUCCEEDED": AccountStatus.READY.value}),
)

# CURRENT is the stack-instance status reported once the instance matches
# its stack set, i.e. the role is in place.
ROLE_STATUS_MAPPING = StatusMapping(
    kind=SignalKind.ROLE_DEPLOYED,
    table=MappingProxyType(
        {
            "SUCCEEDED": RoleStatus.READY.value,
            "CURRENT": RoleStatus.READY.value,
        }
    ),
)

_MAPPINGS: Mapping[SignalKind, StatusMapping] = MappingProxyType(
    {
        mapping.kind: mapping
        for mapping in (
            PROVISION_STATUS_MAPPING,
            ACCOUNT_STATE_MAPPING,
            ROLE_STATUS_MAPPING,
        )
    }
)


def mapping_for(kind: SignalKind) -> StatusMapping:
    """Return the status mapping table used for a signal kind."""
    return _MAPPINGS[kind]
