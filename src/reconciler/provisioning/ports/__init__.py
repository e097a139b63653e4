"""Ports for the provisioning context.

Protocols the application layer depends on; adapters live in
provisioning.infrastructure.
"""

from provisioning.ports.directory import IAccountDirectory
from provisioning.ports.repositories import ITenantAccountStore

__all__ = [
    "IAccountDirectory",
    "ITenantAccountStore",
]
