"""Reconciler settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Deployed functions should set the store settings explicitly.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StoreSettings(BaseSettings):
    """State store settings.

    Environment variables:
        RECONCILER_STORE_BACKEND: "dynamodb" or "memory" (default: dynamodb)
        RECONCILER_STORE_TABLE_NAME: DynamoDB table holding tenant account records
        RECONCILER_STORE_REGION: AWS region of the table (default: AWS_REGION or eu-west-1)
        RECONCILER_STORE_MAX_ATTEMPTS: botocore retry attempts (default: 5)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECONCILER_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["dynamodb", "memory"] = Field(
        default="dynamodb",
        description="Which store adapter to construct",
    )
    table_name: str = Field(default="", description="DynamoDB table name")
    region: str | None = Field(
        default=None,
        description="AWS region; falls back to the SDK's own resolution",
    )
    max_attempts: int = Field(
        default=5,
        description="Maximum botocore attempts per call",
        ge=1,
        le=10,
    )

    @model_validator(mode="after")
    def validate_table_name(self) -> "StoreSettings":
        """Require a table name when the DynamoDB backend is selected."""
        if self.backend == "dynamodb" and not self.table_name:
            raise ValueError("table_name is required when backend is 'dynamodb'")
        return self


class DirectorySettings(BaseSettings):
    """Account directory settings.

    Environment variables:
        RECONCILER_DIRECTORY_BACKEND: "organizations" or "static" (default: organizations)
        RECONCILER_DIRECTORY_ACCOUNT_NAMES: JSON object of account id -> name for the
            static backend
    """

    model_config = SettingsConfigDict(
        env_prefix="RECONCILER_DIRECTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["organizations", "static"] = Field(
        default="organizations",
        description="Which directory adapter to construct",
    )
    account_names: dict[str, str] = Field(
        default_factory=dict,
        description="Account names served by the static directory",
    )


class ProvisioningSettings(BaseSettings):
    """Conventions shared with the upstream provisioning workflow.

    Environment variables:
        RECONCILER_PROVISIONING_TENANT_TAG_KEY: tag carrying the tenant id (default: ps:accountId)
        RECONCILER_PROVISIONING_ENVIRONMENT_TAG_KEY: tag carrying the environment (default: ps:environment)
        RECONCILER_PROVISIONING_ACCOUNT_NAME_PARAMETER_KEY: provisioning parameter with the account name
        RECONCILER_PROVISIONING_ROLE_NAME: name of the cross-account role (default: PageSuiteRole)
        RECONCILER_PROVISIONING_ROLE_PARTITION: ARN partition of the role (default: aws)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECONCILER_PROVISIONING_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    tenant_tag_key: str = Field(default="ps:accountId", min_length=1)
    environment_tag_key: str = Field(default="ps:environment", min_length=1)
    account_name_parameter_key: str = Field(default="AccountName", min_length=1)
    role_name: str = Field(default="PageSuiteRole", min_length=1)
    role_partition: str = Field(default="aws", min_length=1)


class Settings(BaseSettings):
    """Main settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="RECONCILER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="tenant-account-reconciler")
    log_level: str = Field(default="INFO", description="Minimum log level")
    redeliver_transient_errors: bool = Field(
        default=False,
        description=(
            "Re-raise RecordNotFound and StoreWriteConflict after reporting "
            "them so the transport retries the invocation"
        ),
    )

    @property
    def store(self) -> StoreSettings:
        """Get store settings."""
        return get_store_settings()

    @property
    def directory(self) -> DirectorySettings:
        """Get account directory settings."""
        return get_directory_settings()

    @property
    def provisioning(self) -> ProvisioningSettings:
        """Get provisioning convention settings."""
        return get_provisioning_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once per process.
    """
    return Settings()


@lru_cache
def get_store_settings() -> StoreSettings:
    """Get cached store settings."""
    return StoreSettings()


@lru_cache
def get_directory_settings() -> DirectorySettings:
    """Get cached account directory settings."""
    return DirectorySettings()


@lru_cache
def get_provisioning_settings() -> ProvisioningSettings:
    """Get cached provisioning convention settings."""
    return ProvisioningSettings()
