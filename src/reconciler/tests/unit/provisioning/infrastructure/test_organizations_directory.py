"""Unit tests for account directory adapters."""

from unittest.mock import MagicMock, Mock

import pytest
from botocore.exceptions import ClientError

from provisioning.infrastructure.observability import AccountDirectoryProbe
from provisioning.infrastructure.organizations_directory import (
    OrganizationsAccountDirectory,
    StaticAccountDirectory,
)
from provisioning.ports import IAccountDirectory


@pytest.fixture
def mock_client():
    """Mock Organizations client."""
    return MagicMock()


@pytest.fixture
def mock_probe():
    """Mock AccountDirectoryProbe."""
    return Mock(spec=AccountDirectoryProbe)


@pytest.fixture
def directory(mock_client, mock_probe):
    """Organizations directory around the mock client."""
    return OrganizationsAccountDirectory(client=mock_client, probe=mock_probe)


class TestOrganizationsAccountDirectory:
    """Tests for OrganizationsAccountDirectory."""

    def test_implements_directory_port(self, directory):
        """Test that the adapter satisfies IAccountDirectory."""
        assert isinstance(directory, IAccountDirectory)

    def test_returns_account_name(self, directory, mock_client, mock_probe):
        """Test that DescribeAccount's name is returned."""
        mock_client.describe_account.return_value = {
            "Account": {"Id": "111", "Name": "acme-dev", "Status": "ACTIVE"}
        }

        assert directory.resolve_account_name("111") == "acme-dev"
        mock_client.describe_account.assert_called_once_with(AccountId="111")
        mock_probe.account_described.assert_called_once_with("111")

    def test_unnamed_account_is_none(self, directory, mock_client):
        """Test that an empty name is treated as unresolved."""
        mock_client.describe_account.return_value = {"Account": {"Id": "111", "Name": ""}}

        assert directory.resolve_account_name("111") is None

    def test_unknown_account_is_none(self, directory, mock_client, mock_probe):
        """Test that AccountNotFoundException becomes None."""
        mock_client.describe_account.side_effect = ClientError(
            {"Error": {"Code": "AccountNotFoundException", "Message": "nope"}},
            "DescribeAccount",
        )

        assert directory.resolve_account_name("999") is None
        mock_probe.account_not_found.assert_called_once_with("999")

    def test_access_denied_propagates(self, directory, mock_client):
        """Test that other client errors propagate."""
        mock_client.describe_account.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "no"}},
            "DescribeAccount",
        )

        with pytest.raises(ClientError):
            directory.resolve_account_name("111")


class TestStaticAccountDirectory:
    """Tests for StaticAccountDirectory."""

    def test_resolves_known_accounts(self):
        """Test lookups in the fixed mapping."""
        directory = StaticAccountDirectory({"111": "acme-dev", "222": ""})

        assert directory.resolve_account_name("111") == "acme-dev"
        assert directory.resolve_account_name("222") is None
        assert directory.resolve_account_name("333") is None
