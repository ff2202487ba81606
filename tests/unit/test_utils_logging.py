"""Tests for issue_analyzer/utils/logging_config.py."""

import json

import structlog

from issue_analyzer.utils.logging_config import configure_logging


class TestConfigureLogging:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_json_output(self, capsys):
        configure_logging("INFO")

        structlog.get_logger("test").info("issue_stored", issue_id="ISSUE-1")

        event = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert event["event"] == "issue_stored"
        assert event["issue_id"] == "ISSUE-1"
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self, capsys):
        configure_logging("warning")

        structlog.get_logger("test").info("hidden_event")

        assert "hidden_event" not in capsys.readouterr().out

    def test_console_output(self, capsys):
        configure_logging("DEBUG", json_output=False)

        structlog.get_logger("test").debug("console_event", key="value")

        out = capsys.readouterr().out
        assert "console_event" in out
        assert "key" in out
