"""Unit test fixtures shared across the reconciler test suite."""

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest

from provisioning.domain.record import TenantAccountRecord
from provisioning.domain.value_objects import Environment, TenantAccountKey
from provisioning.ports import IAccountDirectory, ITenantAccountStore

T0 = datetime(2026, 1, 8, 12, 0, 0, 123000, tzinfo=UTC)


def make_record(
    tenant_id: str = "t1",
    environment: Environment = Environment.DEV,
    *,
    account_status: str = "PENDING",
    account_id: str = "",
    account_name: str = "",
    role_status: str = "PENDING",
    role_arn: str = "",
    last_modified: datetime = T0,
) -> TenantAccountRecord:
    """Build a TenantAccountRecord with placeholder defaults."""
    return TenantAccountRecord(
        key=TenantAccountKey(tenant_id=tenant_id, environment=environment),
        account_status=account_status,
        account_id=account_id,
        account_name=account_name,
        role_status=role_status,
        role_arn=role_arn,
        last_modified=last_modified,
    )


def provision_product_event(
    tenant_id: str | None = "t1",
    environment: str | None = "Dev",
    account_name: str | None = "acme-dev",
    status: str | None = "CREATED",
) -> dict:
    """Build a Service Catalog ProvisionProduct envelope."""
    tags = []
    if tenant_id is not None:
        tags.append({"key": "ps:accountId", "value": tenant_id})
    if environment is not None:
        tags.append({"key": "ps:environment", "value": environment})
    parameters = []
    if account_name is not None:
        parameters.append({"key": "AccountName", "value": account_name})
    response = {"recordDetail": {"status": status}} if status is not None else {}
    return {
        "id": "evt-provision",
        "source": "aws.servicecatalog",
        "detail-type": "AWS API Call via CloudTrail",
        "detail": {
            "eventName": "ProvisionProduct",
            "requestParameters": {
                "tags": tags,
                "provisioningParameters": parameters,
            },
            "responseElements": response,
        },
    }


def create_managed_account_event(
    account_id: str | None = "111122223333",
    account_name: str | None = "acme-dev",
    state: str | None = "SUCCEEDED",
) -> dict:
    """Build a Control Tower CreateManagedAccount envelope."""
    account = {}
    if account_id is not None:
        account["accountId"] = account_id
    if account_name is not None:
        account["accountName"] = account_name
    status: dict = {"account": account}
    if state is not None:
        status["state"] = state
    return {
        "id": "evt-account",
        "source": "aws.controltower",
        "detail-type": "AWS Service Event via CloudTrail",
        "detail": {
            "eventName": "CreateManagedAccount",
            "serviceEventDetails": {"createManagedAccountStatus": status},
        },
    }


def stack_instance_event(
    stack_id: str = (
        "arn:aws:cloudformation:eu-west-1:111122223333:stack/"
        "StackSet-PageSuiteRole-abc/0a1b2c3d"
    ),
    detailed_status: str | None = "SUCCEEDED",
    status: str | None = None,
) -> dict:
    """Build a CloudFormation StackSet stack instance status change envelope."""
    status_details = {}
    if detailed_status is not None:
        status_details["detailed-status"] = detailed_status
    if status is not None:
        status_details["status"] = status
    return {
        "id": "evt-role",
        "source": "aws.cloudformation",
        "detail-type": "CloudFormation StackSet StackInstance Status Change",
        "detail": {
            "stack-id": stack_id,
            "status-details": status_details,
        },
    }


@pytest.fixture
def dev_key():
    """Key of the t1/Dev tenant account."""
    return TenantAccountKey(tenant_id="t1", environment=Environment.DEV)


@pytest.fixture
def placeholder_record(dev_key):
    """Freshly registered t1/Dev record."""
    return TenantAccountRecord.placeholder(dev_key, T0)


@pytest.fixture
def mock_store():
    """Mock ITenantAccountStore."""
    return Mock(spec=ITenantAccountStore)


@pytest.fixture
def mock_directory():
    """Mock IAccountDirectory."""
    return Mock(spec=IAccountDirectory)


@pytest.fixture
def t0():
    """Timestamp of every record built by the record factory."""
    return T0


@pytest.fixture
def record_factory():
    """Factory building TenantAccountRecord values."""
    return make_record


@pytest.fixture
def provision_event():
    """Factory building ProvisionProduct envelopes."""
    return provision_product_event


@pytest.fixture
def account_event():
    """Factory building CreateManagedAccount envelopes."""
    return create_managed_account_event


@pytest.fixture
def role_event():
    """Factory building stack instance status change envelopes."""
    return stack_instance_event
