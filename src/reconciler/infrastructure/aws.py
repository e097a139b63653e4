"""AWS SDK client construction.

Clients are built per invocation and handed to adapters explicitly; nothing
in this module caches a client at module level.
"""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config

from infrastructure.observability import AWSClientProbe, DefaultAWSClientProbe
from infrastructure.settings import StoreSettings


class AWSClientFactory:
    """Builds boto3 clients with the retry policy from settings."""

    def __init__(
        self,
        settings: StoreSettings,
        session: boto3.session.Session | None = None,
        probe: AWSClientProbe | None = None,
    ) -> None:
        """Initialize the factory.

        Args:
            settings: Store settings supplying region and retry attempts
            session: Optional boto3 session (defaults to a fresh session)
            probe: Optional domain probe for observability
        """
        self._settings = settings
        self._session = session or boto3.session.Session()
        self._probe = probe or DefaultAWSClientProbe()

    def _config(self) -> Config:
        return Config(
            retries={"max_attempts": self._settings.max_attempts, "mode": "standard"}
        )

    def dynamodb(self) -> Any:
        """Return a low-level DynamoDB client."""
        client = self._session.client(
            "dynamodb",
            region_name=self._settings.region,
            config=self._config(),
        )
        self._probe.client_created("dynamodb", self._settings.region)
        return client

    def organizations(self) -> Any:
        """Return an AWS Organizations client.

        Organizations is a global service; the configured region only selects
        the endpoint the SDK talks to.
        """
        client = self._session.client(
            "organizations",
            region_name=self._settings.region,
            config=self._config(),
        )
        self._probe.client_created("organizations", self._settings.region)
        return client
