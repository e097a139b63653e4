"""Normalization of raw lifecycle event envelopes into signals.

Three upstream sources report progress of an account's lifecycle, each with
its own payload shape. This module is the only place that knows those shapes;
everything downstream works on LifecycleSignal values.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from infrastructure.settings import ProvisioningSettings
from provisioning.domain.exceptions import (
    CorrelationKeyMissingError,
    MalformedResourceIdError,
    ReconciliationError,
)
from provisioning.domain.signals import (
    AccountCreated,
    LifecycleSignal,
    ProvisionRequested,
    RoleDeployed,
)
from provisioning.domain.value_objects import SignalKind, TenantAccountKey
from provisioning.infrastructure.observability import (
    DefaultNormalizerProbe,
    NormalizerProbe,
)
from shared_kernel.envelope import EventEnvelope
from shared_kernel.resource_identifiers import ResourceIdentifier

SERVICE_CATALOG_SOURCE = "aws.servicecatalog"
CONTROL_TOWER_SOURCE = "aws.controltower"
CLOUDFORMATION_SOURCE = "aws.cloudformation"

PROVISION_PRODUCT_EVENT = "ProvisionProduct"
CREATE_MANAGED_ACCOUNT_EVENT = "CreateManagedAccount"
STACK_INSTANCE_STATUS_CHANGE = "CloudFormation StackSet StackInstance Status Change"

UNKNOWN_STATUS = "UNKNOWN"

_SUPPORTED_EVENTS: frozenset[str] = frozenset(
    {
        f"{SERVICE_CATALOG_SOURCE}:{PROVISION_PRODUCT_EVENT}",
        f"{CONTROL_TOWER_SOURCE}:{CREATE_MANAGED_ACCOUNT_EVENT}",
        f"{CLOUDFORMATION_SOURCE}:{STACK_INSTANCE_STATUS_CHANGE}",
    }
)


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _string(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _find_value(items: Any, key: str) -> str:
    """Return the value of the first ``{key, value}`` item whose key matches."""
    if not isinstance(items, list):
        return ""
    for item in items:
        item = _mapping(item)
        if item.get("key") == key:
            return _string(item.get("value"))
    return ""


class LifecycleEventNormalizer:
    """Translates raw envelopes from the three upstream sources to signals.

    Routing is on the (source, discriminator) pair: the CloudTrail event name
    for Service Catalog and Control Tower, the detail-type for CloudFormation.
    Envelopes matching none of them are irrelevant, not errors.
    """

    def __init__(
        self,
        settings: ProvisioningSettings | None = None,
        probe: NormalizerProbe | None = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            settings: Tag and parameter conventions of the provisioning workflow
            probe: Optional domain probe for observability
        """
        self._settings = settings or ProvisioningSettings()
        self._probe = probe or DefaultNormalizerProbe()

    def supported_event_types(self) -> frozenset[str]:
        """Return the "source:discriminator" pairs this normalizer handles."""
        return _SUPPORTED_EVENTS

    def normalize(self, envelope: EventEnvelope) -> LifecycleSignal | None:
        """Convert an envelope into a lifecycle signal.

        Args:
            envelope: The raw event envelope

        Returns:
            The signal, or None if the envelope is not a lifecycle event

        Raises:
            CorrelationKeyMissingError: If a recognized event lacks a field
                required for correlation
            MalformedResourceIdError: If the stack id cannot be decomposed
        """
        match envelope.source:
            case "aws.servicecatalog" if envelope.event_name == PROVISION_PRODUCT_EVENT:
                kind = SignalKind.PROVISION_REQUESTED
                parse = self._normalize_provision_product
            case "aws.controltower" if envelope.event_name == CREATE_MANAGED_ACCOUNT_EVENT:
                kind = SignalKind.ACCOUNT_CREATED
                parse = self._normalize_create_managed_account
            case "aws.cloudformation" if envelope.detail_type == STACK_INSTANCE_STATUS_CHANGE:
                kind = SignalKind.ROLE_DEPLOYED
                parse = self._normalize_stack_instance_status
            case _:
                self._probe.event_irrelevant(
                    envelope.source, envelope.event_name or envelope.detail_type
                )
                return None

        try:
            signal = parse(envelope.detail)
        except ReconciliationError as e:
            self._probe.normalization_failed(kind, e.code, str(e))
            raise

        self._probe.signal_normalized(kind)
        return signal

    def _normalize_provision_product(
        self,
        detail: Mapping[str, Any],
    ) -> ProvisionRequested:
        """Translate a Service Catalog ProvisionProduct call."""
        request = _mapping(detail.get("requestParameters"))
        tags = request.get("tags")

        tenant_id = _find_value(tags, self._settings.tenant_tag_key)
        environment = _find_value(tags, self._settings.environment_tag_key)

        missing = tuple(
            tag
            for tag, value in (
                (self._settings.tenant_tag_key, tenant_id),
                (self._settings.environment_tag_key, environment),
            )
            if not value
        )
        if missing:
            raise CorrelationKeyMissingError(
                f"ProvisionProduct request is missing tags: {', '.join(missing)}",
                missing=missing,
            )

        try:
            key = TenantAccountKey.of(tenant_id, environment)
        except ValueError as e:
            raise CorrelationKeyMissingError(
                str(e), missing=(self._settings.environment_tag_key,)
            ) from e

        record_detail = _mapping(
            _mapping(detail.get("responseElements")).get("recordDetail")
        )

        return ProvisionRequested(
            key=key,
            account_name=_find_value(
                request.get("provisioningParameters"),
                self._settings.account_name_parameter_key,
            ),
            raw_status=_string(record_detail.get("status")) or UNKNOWN_STATUS,
        )

    def _normalize_create_managed_account(
        self,
        detail: Mapping[str, Any],
    ) -> AccountCreated:
        """Translate a Control Tower CreateManagedAccount completion."""
        status = _mapping(
            _mapping(detail.get("serviceEventDetails")).get("createManagedAccountStatus")
        )
        account = _mapping(status.get("account"))

        account_name = _string(account.get("accountName"))
        if not account_name:
            raise CorrelationKeyMissingError(
                "CreateManagedAccount event has no account name",
                missing=("accountName",),
            )

        return AccountCreated(
            account_id=_string(account.get("accountId")),
            account_name=account_name,
            raw_state=_string(status.get("state")) or UNKNOWN_STATUS,
        )

    def _normalize_stack_instance_status(
        self,
        detail: Mapping[str, Any],
    ) -> RoleDeployed:
        """Translate a StackSet stack instance status change."""
        stack_id = _string(detail.get("stack-id"))
        try:
            resource = ResourceIdentifier.parse(stack_id)
        except ValueError as e:
            raise MalformedResourceIdError(str(e), resource_id=stack_id) from e

        status_details = _mapping(detail.get("status-details"))
        raw_status = (
            _string(status_details.get("detailed-status"))
            or _string(status_details.get("status"))
            or UNKNOWN_STATUS
        )

        return RoleDeployed(cloud_account_id=resource.account_id, raw_status=raw_status)
