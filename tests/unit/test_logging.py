"""Tests for the structlog service-context processor."""

from officing.config import Settings
from officing.middleware.logging import service_context


class TestServiceContext:

    def test_adds_deployment_fields(self):
        processor = service_context(Settings(environment="staging", app_version="1.2.3"))

        event = processor(None, "info", {"event": "checkin_recorded"})

        assert event == {
            "event": "checkin_recorded",
            "service": "officing",
            "environment": "staging",
            "version": "1.2.3",
        }

    def test_bound_fields_win(self):
        processor = service_context(Settings(environment="staging"))

        event = processor(None, "info", {"event": "x", "environment": "override"})

        assert event["environment"] == "override"
