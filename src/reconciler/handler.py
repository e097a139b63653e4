"""Lambda entry point for the tenant account reconciler.

Each invocation carries one EventBridge envelope. The handler normalizes it,
reconciles the resulting signal against the state store and returns a small
report. Failures from the reconciliation taxonomy are reported through the
invocation probe and end the invocation with status "dropped"; anything else
(misconfiguration, unexpected SDK errors) propagates to the runtime.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import ValidationError

from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from provisioning.application.observability import DefaultInvocationProbe
from provisioning.dependencies import (
    get_account_directory,
    get_event_normalizer,
    get_reconciliation_service,
    get_tenant_account_store,
)
from provisioning.domain.exceptions import ReconciliationError
from shared_kernel.envelope import EventEnvelope
from shared_kernel.observability_context import ObservationContext

STATUS_APPLIED = "applied"
STATUS_SKIPPED = "skipped"
STATUS_IGNORED = "ignored"
STATUS_DROPPED = "dropped"


@lru_cache
def _configure_logging_once(level: str) -> None:
    configure_logging(level)


def _observation_context(event: Any, context: Any) -> ObservationContext:
    raw = event if isinstance(event, Mapping) else {}
    event_id = raw.get("id")
    source = raw.get("source")
    return ObservationContext(
        request_id=getattr(context, "aws_request_id", None),
        event_id=event_id if isinstance(event_id, str) else None,
        event_source=source if isinstance(source, str) else None,
    )


def lambda_handler(event: Any, context: Any = None) -> dict[str, Any]:
    """Process one lifecycle event.

    Args:
        event: The raw EventBridge envelope
        context: Lambda context object (only aws_request_id is read)

    Returns:
        {"status": "applied" | "skipped" | "ignored" | "dropped"}, plus
        "signal" once the event was normalized and "error" when dropped

    Raises:
        ReconciliationError: For transient failures when
            RECONCILER_REDELIVER_TRANSIENT_ERRORS is enabled
    """
    settings = get_settings()
    _configure_logging_once(settings.log_level)

    observation = _observation_context(event, context)
    probe = DefaultInvocationProbe().with_context(observation)

    if not isinstance(event, Mapping):
        probe.event_rejected(f"Expected a mapping, got {type(event).__name__}")
        return {"status": STATUS_IGNORED}

    try:
        envelope = EventEnvelope.from_raw(event)
    except ValidationError as e:
        probe.event_rejected(str(e))
        return {"status": STATUS_IGNORED}

    probe.event_received(envelope.source, envelope.detail_type)

    signal = None
    try:
        normalizer = get_event_normalizer(settings.provisioning, observation)
        signal = normalizer.normalize(envelope)
        if signal is None:
            probe.event_ignored(envelope.source, envelope.detail_type)
            return {"status": STATUS_IGNORED}

        store = get_tenant_account_store(settings.store, observation)
        directory = get_account_directory(
            settings.directory, settings.store, observation
        )
        service = get_reconciliation_service(
            store, directory, settings.provisioning, observation
        )
        outcome = service.reconcile(signal)
    except ReconciliationError as e:
        probe.event_dropped(e)
        if e.transient and settings.redeliver_transient_errors:
            raise
        result: dict[str, Any] = {"status": STATUS_DROPPED, "error": e.code}
        if signal is not None:
            result["signal"] = str(signal.kind)
        return result

    return {
        "status": STATUS_APPLIED if outcome.applied else STATUS_SKIPPED,
        "signal": str(outcome.signal_kind),
    }
