"""Structured Logging — JSON formatter fields and idempotent setup."""

import json
import logging

from fleet_api.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "fleet_api.test", logging.WARNING, __file__, 1, "load %s moved", (7,), None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_core_fields():
    log = json.loads(JSONFormatter().format(_record()))
    assert log["level"] == "WARNING"
    assert log["logger"] == "fleet_api.test"
    assert log["message"] == "load 7 moved"
    assert "timestamp" in log


def test_json_formatter_surfaces_domain_extras():
    log = json.loads(JSONFormatter().format(_record(truck_id=1, load_id=7, path="/trucks/1")))
    assert log["truck_id"] == 1
    assert log["load_id"] == 7
    assert log["path"] == "/trucks/1"


def test_json_formatter_omits_absent_extras():
    log = json.loads(JSONFormatter().format(_record(truck_id=None)))
    assert "truck_id" not in log


def test_setup_logging_is_idempotent():
    setup_logging("DEBUG", "json")
    before = len(logging.root.handlers)
    setup_logging("INFO", "text")
    assert len(logging.root.handlers) == before
    assert logging.root.level == logging.INFO
