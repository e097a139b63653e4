"""Unit tests for EventEnvelope."""

import pytest
from pydantic import ValidationError

from shared_kernel.envelope import EventEnvelope


class TestEventEnvelope:
    """Tests for parsing raw envelopes."""

    def test_parses_eventbridge_fields(self):
        """Test that the hyphenated detail-type is read through its alias."""
        envelope = EventEnvelope.from_raw(
            {
                "id": "evt-1",
                "source": "aws.cloudformation",
                "detail-type": "CloudFormation StackSet StackInstance Status Change",
                "account": "999",
                "region": "eu-west-1",
                "time": "2026-01-08T12:00:00Z",
                "detail": {"stack-id": "arn:aws:cloudformation:eu-west-1:111:stack/x"},
            }
        )

        assert envelope.id == "evt-1"
        assert envelope.source == "aws.cloudformation"
        assert envelope.detail_type == "CloudFormation StackSet StackInstance Status Change"
        assert envelope.detail["stack-id"].startswith("arn:")

    def test_missing_fields_default(self):
        """Test that an empty mapping is still an envelope."""
        envelope = EventEnvelope.from_raw({})

        assert envelope.source == ""
        assert envelope.detail_type == ""
        assert envelope.detail == {}
        assert envelope.event_name is None

    def test_null_detail_is_empty(self):
        """Test that a null detail becomes an empty payload."""
        assert EventEnvelope.from_raw({"detail": None}).detail == {}

    def test_event_name_read_from_detail(self):
        """Test the CloudTrail event name accessor."""
        envelope = EventEnvelope.from_raw({"detail": {"eventName": "ProvisionProduct"}})

        assert envelope.event_name == "ProvisionProduct"

    def test_non_string_event_name_is_ignored(self):
        """Test that a malformed eventName is treated as absent."""
        assert EventEnvelope.from_raw({"detail": {"eventName": 7}}).event_name is None

    def test_unknown_fields_are_ignored(self):
        """Test that extra envelope fields do not fail parsing."""
        envelope = EventEnvelope.from_raw({"source": "x", "resources": ["a"], "version": "0"})

        assert envelope.source == "x"

    def test_non_mapping_detail_is_rejected(self):
        """Test that a detail that is not an object fails validation."""
        with pytest.raises(ValidationError):
            EventEnvelope.from_raw({"detail": "oops"})

    def test_is_immutable(self):
        """Test that envelopes cannot be modified after parsing."""
        envelope = EventEnvelope.from_raw({"source": "x"})

        with pytest.raises(ValidationError):
            envelope.source = "y"
