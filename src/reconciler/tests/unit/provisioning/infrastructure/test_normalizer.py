"""Unit tests for LifecycleEventNormalizer."""

from unittest.mock import Mock

import pytest

from infrastructure.settings import ProvisioningSettings
from provisioning.domain.exceptions import (
    CorrelationKeyMissingError,
    MalformedResourceIdError,
)
from provisioning.domain.signals import AccountCreated, ProvisionRequested, RoleDeployed
from provisioning.domain.value_objects import SignalKind, TenantAccountKey
from provisioning.infrastructure.events.normalizer import LifecycleEventNormalizer
from provisioning.infrastructure.observability import NormalizerProbe
from shared_kernel.envelope import EventEnvelope


@pytest.fixture
def mock_probe():
    """Mock NormalizerProbe."""
    return Mock(spec=NormalizerProbe)


@pytest.fixture
def normalizer(mock_probe):
    """Normalizer with default conventions."""
    return LifecycleEventNormalizer(settings=ProvisioningSettings(), probe=mock_probe)


def envelope(raw):
    return EventEnvelope.from_raw(raw)


class TestProvisionProduct:
    """Tests for Service Catalog ProvisionProduct events."""

    def test_extracts_key_name_and_status(self, normalizer, provision_event, mock_probe):
        """Test the complete ProvisionRequested signal."""
        signal = normalizer.normalize(envelope(provision_event()))

        assert signal == ProvisionRequested(
            key=TenantAccountKey.of("t1", "Dev"),
            account_name="acme-dev",
            raw_status="CREATED",
        )
        mock_probe.signal_normalized.assert_called_once_with(SignalKind.PROVISION_REQUESTED)

    def test_missing_account_name_is_empty(self, normalizer, provision_event):
        """Test that the account name parameter is optional."""
        signal = normalizer.normalize(envelope(provision_event(account_name=None)))

        assert signal.account_name == ""

    def test_missing_status_is_unknown(self, normalizer, provision_event):
        """Test the default raw status."""
        signal = normalizer.normalize(envelope(provision_event(status=None)))

        assert signal.raw_status == "UNKNOWN"

    @pytest.mark.parametrize(
        ("overrides", "missing"),
        [
            ({"tenant_id": None}, ("ps:accountId",)),
            ({"environment": None}, ("ps:environment",)),
            ({"tenant_id": ""}, ("ps:accountId",)),
            ({"tenant_id": None, "environment": None}, ("ps:accountId", "ps:environment")),
        ],
    )
    def test_missing_tags(self, normalizer, provision_event, mock_probe, overrides, missing):
        """Test that either correlation tag being absent is fatal."""
        with pytest.raises(CorrelationKeyMissingError) as exc_info:
            normalizer.normalize(envelope(provision_event(**overrides)))

        assert exc_info.value.missing == missing
        mock_probe.normalization_failed.assert_called_once()
        mock_probe.signal_normalized.assert_not_called()

    def test_unknown_environment(self, normalizer, provision_event):
        """Test that an environment outside the closed set is fatal."""
        with pytest.raises(CorrelationKeyMissingError, match="Unknown environment"):
            normalizer.normalize(envelope(provision_event(environment="Staging")))

    def test_request_without_tags(self, normalizer):
        """Test a ProvisionProduct call with no request parameters at all."""
        raw = {
            "source": "aws.servicecatalog",
            "detail": {"eventName": "ProvisionProduct"},
        }

        with pytest.raises(CorrelationKeyMissingError):
            normalizer.normalize(envelope(raw))

    def test_configured_tag_keys(self, provision_event):
        """Test that tag and parameter keys follow settings."""
        settings = ProvisioningSettings(
            tenant_tag_key="tenant",
            environment_tag_key="env",
            account_name_parameter_key="Name",
        )
        raw = provision_event()
        raw["detail"]["requestParameters"] = {
            "tags": [{"key": "tenant", "value": "t9"}, {"key": "env", "value": "UAT"}],
            "provisioningParameters": [{"key": "Name", "value": "n"}],
        }

        signal = LifecycleEventNormalizer(settings=settings, probe=Mock()).normalize(
            envelope(raw)
        )

        assert signal.key == TenantAccountKey.of("t9", "UAT")
        assert signal.account_name == "n"


class TestCreateManagedAccount:
    """Tests for Control Tower CreateManagedAccount events."""

    def test_extracts_account(self, normalizer, account_event):
        """Test the complete AccountCreated signal."""
        signal = normalizer.normalize(envelope(account_event()))

        assert signal == AccountCreated(
            account_id="111122223333", account_name="acme-dev", raw_state="SUCCEEDED"
        )

    def test_failed_without_account_id(self, normalizer, account_event):
        """Test that a failed creation may lack an account id."""
        signal = normalizer.normalize(envelope(account_event(account_id=None, state="FAILED")))

        assert signal.account_id == ""
        assert signal.raw_state == "FAILED"

    def test_missing_state_is_unknown(self, normalizer, account_event):
        """Test the default raw state."""
        assert normalizer.normalize(envelope(account_event(state=None))).raw_state == "UNKNOWN"

    @pytest.mark.parametrize("account_name", [None, ""])
    def test_missing_account_name(self, normalizer, account_event, account_name):
        """Test that an event without a name cannot be correlated."""
        with pytest.raises(CorrelationKeyMissingError):
            normalizer.normalize(envelope(account_event(account_name=account_name)))


class TestStackInstanceStatusChange:
    """Tests for CloudFormation stack instance status events."""

    def test_extracts_account_from_stack_id(self, normalizer, role_event):
        """Test that the account segment of the stack id is the cloud account."""
        signal = normalizer.normalize(envelope(role_event()))

        assert signal == RoleDeployed(cloud_account_id="111122223333", raw_status="SUCCEEDED")

    def test_falls_back_to_status(self, normalizer, role_event):
        """Test that status is used when detailed-status is absent."""
        signal = normalizer.normalize(envelope(role_event(detailed_status=None, status="CURRENT")))

        assert signal.raw_status == "CURRENT"

    def test_prefers_detailed_status(self, normalizer, role_event):
        """Test that detailed-status wins over status."""
        signal = normalizer.normalize(
            envelope(role_event(detailed_status="FAILED", status="OUTDATED"))
        )

        assert signal.raw_status == "FAILED"

    def test_missing_status_is_unknown(self, normalizer, role_event):
        """Test the default raw status."""
        signal = normalizer.normalize(envelope(role_event(detailed_status=None)))

        assert signal.raw_status == "UNKNOWN"

    @pytest.mark.parametrize(
        "stack_id",
        ["", "stack/abc", "arn:aws:cloudformation:eu-west-1", "arn:aws:cloudformation:eu-west-1::stack/x"],
    )
    def test_malformed_stack_id(self, normalizer, role_event, mock_probe, stack_id):
        """Test that stack ids without an account segment are rejected."""
        with pytest.raises(MalformedResourceIdError) as exc_info:
            normalizer.normalize(envelope(role_event(stack_id=stack_id)))

        assert exc_info.value.resource_id == stack_id
        mock_probe.normalization_failed.assert_called_once()
        assert mock_probe.normalization_failed.call_args[0][1] == "MalformedResourceId"


class TestIrrelevantEvents:
    """Tests for envelopes that are not lifecycle events."""

    @pytest.mark.parametrize(
        "raw",
        [
            {"source": "aws.ec2", "detail-type": "EC2 Instance State-change Notification"},
            {"source": "aws.servicecatalog", "detail": {"eventName": "TerminateProvisionedProduct"}},
            {"source": "aws.controltower", "detail": {"eventName": "UpdateManagedAccount"}},
            {"source": "aws.cloudformation", "detail-type": "CloudFormation Stack Status Change"},
            {"source": "aws.cloudformation", "detail": {"eventName": "ProvisionProduct"}},
            {},
        ],
    )
    def test_returns_none(self, normalizer, mock_probe, raw):
        """Test that unknown source/discriminator pairs are irrelevant, not errors."""
        assert normalizer.normalize(envelope(raw)) is None
        mock_probe.event_irrelevant.assert_called_once()

    def test_supported_event_types(self, normalizer):
        """Test the advertised source/discriminator pairs."""
        assert normalizer.supported_event_types() == {
            "aws.servicecatalog:ProvisionProduct",
            "aws.controltower:CreateManagedAccount",
            "aws.cloudformation:CloudFormation StackSet StackInstance Status Change",
        }
