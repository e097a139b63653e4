"""Unit tests for AWSClientFactory."""

from unittest.mock import MagicMock, Mock

import pytest
import structlog

from infrastructure.aws import AWSClientFactory
from infrastructure.observability import (
    AWSClientProbe,
    DefaultAWSClientProbe,
    ObservationContext,
)
from infrastructure.settings import StoreSettings


@pytest.fixture
def mock_session():
    """Mock boto3 session."""
    return MagicMock()


@pytest.fixture
def mock_probe():
    """Mock AWSClientProbe."""
    return Mock(spec=AWSClientProbe)


@pytest.fixture
def factory(mock_session, mock_probe):
    """Client factory with explicit region and retry policy."""
    settings = StoreSettings(
        backend="dynamodb", table_name="t", region="eu-west-1", max_attempts=3
    )
    return AWSClientFactory(settings, session=mock_session, probe=mock_probe)


class TestAWSClientFactory:
    """Tests for AWSClientFactory."""

    def test_dynamodb_client(self, factory, mock_session, mock_probe):
        """Should build a DynamoDB client with the configured retry policy."""
        client = factory.dynamodb()

        assert client is mock_session.client.return_value
        args, kwargs = mock_session.client.call_args
        assert args == ("dynamodb",)
        assert kwargs["region_name"] == "eu-west-1"
        assert kwargs["config"].retries == {"max_attempts": 3, "mode": "standard"}
        mock_probe.client_created.assert_called_once_with("dynamodb", "eu-west-1")

    def test_organizations_client(self, factory, mock_session, mock_probe):
        """Should build an Organizations client."""
        factory.organizations()

        assert mock_session.client.call_args[0] == ("organizations",)
        mock_probe.client_created.assert_called_once_with("organizations", "eu-west-1")


class TestDefaultAWSClientProbe:
    """Tests for DefaultAWSClientProbe."""

    def test_client_created(self):
        """Should log client construction at debug with the bound context."""
        mock_logger = MagicMock(spec=structlog.stdlib.BoundLogger)
        probe = DefaultAWSClientProbe(logger=mock_logger).with_context(
            ObservationContext(request_id="req-1")
        )

        probe.client_created("dynamodb", None)

        mock_logger.debug.assert_called_once_with(
            "aws_client_created", service="dynamodb", region=None, request_id="req-1"
        )
