"""DynamoDB implementation of the tenant account store.

Items are keyed "PS#<tenant>" / "ENV#<environment>" and carry the record
attributes under the names the rest of the provisioning workflow reads.
Conditional writes are expressed with ConditionExpression; a failed condition
surfaces as ConditionalCheckFailedException and is translated to the port's
exceptions.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer
from botocore.exceptions import ClientError

from provisioning.domain.record import RecordChanges, TenantAccountRecord
from provisioning.domain.value_objects import TenantAccountKey
from provisioning.infrastructure.observability import (
    DefaultTenantAccountStoreProbe,
    TenantAccountStoreProbe,
)
from provisioning.ports.exceptions import (
    DuplicateTenantAccountError,
    StoreWriteConflictError,
)
from shared_kernel.timestamps import format_timestamp, parse_timestamp

PARTITION_KEY = "PK"
SORT_KEY = "SK"
LAST_MODIFIED = "LastModified"

# Record field -> item attribute
FIELD_ATTRIBUTES: dict[str, str] = {
    "account_status": "AwsAccountStatus",
    "account_id": "AwsAccountId",
    "account_name": "AwsAccountName",
    "role_status": "PageSuiteRoleStatus",
    "role_arn": "PageSuiteRoleArn",
}

_CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _serialize(value: str) -> dict[str, Any]:
    return _serializer.serialize(value)


def _is_conditional_failure(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") == _CONDITIONAL_CHECK_FAILED


def _key(key: TenantAccountKey) -> dict[str, Any]:
    return {
        PARTITION_KEY: _serialize(key.partition_key),
        SORT_KEY: _serialize(key.sort_key),
    }


def _to_item(record: TenantAccountRecord) -> dict[str, Any]:
    item = _key(record.key)
    for field, attribute in FIELD_ATTRIBUTES.items():
        item[attribute] = _serialize(getattr(record, field))
    item[LAST_MODIFIED] = _serialize(format_timestamp(record.last_modified))
    return item


def _to_record(item: dict[str, Any]) -> TenantAccountRecord:
    data = {name: _deserializer.deserialize(value) for name, value in item.items()}
    return TenantAccountRecord(
        key=TenantAccountKey.from_storage(data[PARTITION_KEY], data[SORT_KEY]),
        last_modified=parse_timestamp(data[LAST_MODIFIED]),
        stored_last_modified=data[LAST_MODIFIED],
        **{field: data.get(attribute, "") for field, attribute in FIELD_ATTRIBUTES.items()},
    )


class DynamoDBTenantAccountStore:
    """Tenant account store backed by a single DynamoDB table.

    The client is a low-level boto3 DynamoDB client supplied by the caller;
    this adapter never constructs one itself.
    """

    def __init__(
        self,
        client: Any,
        table_name: str,
        probe: TenantAccountStoreProbe | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            client: boto3 DynamoDB client
            table_name: Name of the table holding tenant account records
            probe: Optional domain probe for observability
        """
        self._client = client
        self._table_name = table_name
        self._probe = probe or DefaultTenantAccountStoreProbe()

    def create(self, record: TenantAccountRecord) -> None:
        """Insert a record unless its key already exists."""
        try:
            self._client.put_item(
                TableName=self._table_name,
                Item=_to_item(record),
                ConditionExpression=(
                    f"attribute_not_exists({PARTITION_KEY}) "
                    f"AND attribute_not_exists({SORT_KEY})"
                ),
            )
        except ClientError as e:
            if _is_conditional_failure(e):
                self._probe.duplicate_record(record.key)
                raise DuplicateTenantAccountError(
                    f"Tenant account {record.key} already exists"
                ) from e
            raise

        self._probe.record_created(record.key)

    def get(self, key: TenantAccountKey) -> TenantAccountRecord | None:
        """Read a record with a strongly consistent get."""
        response = self._client.get_item(
            TableName=self._table_name,
            Key=_key(key),
            ConsistentRead=True,
        )
        item = response.get("Item")
        if item is None:
            return None

        self._probe.record_retrieved(key)
        return _to_record(item)

    def update(
        self,
        key: TenantAccountKey,
        changes: RecordChanges,
        last_modified: datetime,
        expected_version: str,
    ) -> TenantAccountRecord:
        """Apply changes conditioned on the previously read LastModified."""
        names = {"#lm": LAST_MODIFIED}
        values = {
            ":lm": _serialize(format_timestamp(last_modified)),
            ":expected": _serialize(expected_version),
        }
        assignments = ["#lm = :lm"]

        changed = changes.as_dict()
        for index, (field, value) in enumerate(changed.items()):
            names[f"#a{index}"] = FIELD_ATTRIBUTES[field]
            values[f":v{index}"] = _serialize(value)
            assignments.append(f"#a{index} = :v{index}")

        try:
            response = self._client.update_item(
                TableName=self._table_name,
                Key=_key(key),
                UpdateExpression="SET " + ", ".join(assignments),
                ConditionExpression=f"attribute_exists({PARTITION_KEY}) AND #lm = :expected",
                ExpressionAttributeNames=names,
                ExpressionAttributeValues=values,
                ReturnValues="ALL_NEW",
            )
        except ClientError as e:
            if _is_conditional_failure(e):
                self._probe.update_precondition_failed(key)
                raise StoreWriteConflictError(
                    f"Tenant account {key} changed or disappeared since it was read"
                ) from e
            raise

        self._probe.record_updated(key, sorted(changed))
        return _to_record(response["Attributes"])

    def scan_by_attribute(self, attribute: str, value: str) -> list[TenantAccountRecord]:
        """Scan the whole table for items whose attribute equals value."""
        if attribute not in FIELD_ATTRIBUTES:
            raise ValueError(f"Cannot scan on attribute: {attribute!r}")

        paginator = self._client.get_paginator("scan")
        pages = paginator.paginate(
            TableName=self._table_name,
            FilterExpression="#attr = :value",
            ExpressionAttributeNames={"#attr": FIELD_ATTRIBUTES[attribute]},
            ExpressionAttributeValues={":value": _serialize(value)},
            ConsistentRead=True,
        )

        records = [_to_record(item) for page in pages for item in page.get("Items", [])]
        self._probe.records_scanned(attribute, len(records))
        return records
