"""Inbound event envelope.

Lifecycle events arrive wrapped in an EventBridge-shaped envelope. Only the
fields the reconciler routes on are modelled; the payload stays a plain
mapping so each source adapter can read exactly what it needs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventEnvelope(BaseModel):
    """Immutable view of one raw event envelope.

    Attributes:
        id: Transport-assigned event id, if present
        source: Emitting service (e.g. "aws.servicecatalog")
        detail_type: Envelope "detail-type" field
        account: Account the event was emitted in
        region: Region the event was emitted in
        time: Emission time as sent by the transport
        detail: Source-specific payload
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    id: str | None = None
    source: str = ""
    detail_type: str = Field(default="", alias="detail-type")
    account: str | None = None
    region: str | None = None
    time: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)

    @field_validator("detail", mode="before")
    @classmethod
    def _default_missing_detail(cls, value: Any) -> Any:
        """Treat a null detail as an empty payload."""
        return {} if value is None else value

    @property
    def event_name(self) -> str | None:
        """CloudTrail event name carried in the payload, if any."""
        name = self.detail.get("eventName")
        return name if isinstance(name, str) else None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> EventEnvelope:
        """Build an envelope from the raw event mapping.

        Raises:
            pydantic.ValidationError: If the mapping is not envelope-shaped
        """
        return cls.model_validate(dict(raw))
