"""Parsing and formatting of colon-delimited cloud resource identifiers (ARNs)."""

from __future__ import annotations

from dataclasses import dataclass

# arn:partition:service:region:account-id[:resource]
_MIN_SEGMENTS = 5


@dataclass(frozen=True)
class ResourceIdentifier:
    """A decomposed resource identifier.

    Attributes:
        partition: ARN partition (e.g. "aws")
        service: Owning service (e.g. "cloudformation")
        region: Region segment, empty for global services
        account_id: Account segment
        resource: Everything after the account segment, colons included
    """

    partition: str
    service: str
    region: str
    account_id: str
    resource: str = ""

    @classmethod
    def parse(cls, value: str) -> ResourceIdentifier:
        """Decompose a resource identifier string.

        Args:
            value: Identifier such as "arn:aws:cloudformation:eu-west-1:111:stack/x/y"

        Returns:
            The decomposed identifier

        Raises:
            ValueError: If the string has fewer than five colon-delimited
                segments or an empty account segment
        """
        parts = value.split(":", _MIN_SEGMENTS)
        if len(parts) < _MIN_SEGMENTS:
            raise ValueError(f"Invalid resource identifier: {value!r}")
        account_id = parts[4]
        if not account_id:
            raise ValueError(f"Resource identifier has no account segment: {value!r}")
        return cls(
            partition=parts[1],
            service=parts[2],
            region=parts[3],
            account_id=account_id,
            resource=parts[5] if len(parts) > _MIN_SEGMENTS else "",
        )


def format_role_arn(partition: str, account_id: str, role_name: str) -> str:
    """Format the ARN of an IAM role.

    Example:
        >>> format_role_arn("aws", "111122223333", "PageSuiteRole")
        "arn:aws:iam::111122223333:role/PageSuiteRole"
    """
    return f"arn:{partition}:iam::{account_id}:role/{role_name}"
