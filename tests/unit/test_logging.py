"""Tests for logging setup."""

from __future__ import annotations

import json
import logging

from loadstats._internal.logging import _JsonFormatter, get_logger, setup_logging


class TestLogging:
    def test_get_logger_namespace(self):
        assert get_logger("live.registry").name == "loadstats.live.registry"

    def test_setup_is_idempotent(self):
        logger = setup_logging(logging.WARNING)
        handlers = list(logger.handlers)
        setup_logging(logging.DEBUG)
        assert logger.handlers == handlers
        assert logger.level == logging.DEBUG
        assert all(h.level == logging.DEBUG for h in logger.handlers)

    def test_json_formatter_includes_extra(self):
        record = logging.makeLogRecord(
            {
                "name": "loadstats.report.pipeline",
                "levelname": "DEBUG",
                "msg": "Pipeline started",
                "strategy": "ErrorsSummary",
            }
        )
        entry = json.loads(_JsonFormatter().format(record))
        assert entry["logger"] == "loadstats.report.pipeline"
        assert entry["message"] == "Pipeline started"
        assert entry["strategy"] == "ErrorsSummary"
        assert "timestamp" in entry
