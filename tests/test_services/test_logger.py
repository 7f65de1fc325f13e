"""Tests for JSON logger setup."""

import io
import json

from pgmetrics.utils.logger import setup_logger


def _records(stream):
    return [json.loads(line) for line in stream.getvalue().splitlines()]


def test_records_are_json_with_level_and_database():
    stream = io.StringIO()
    logger = setup_logger("pgmetrics.test.db", "INFO", database_name="app", stream=stream)

    logger.info("Collected", extra={"domain": "locks"})

    [record] = _records(stream)
    assert record["message"] == "Collected"
    assert record["levelname"] == "INFO"
    assert record["name"] == "pgmetrics.test.db"
    assert record["database"] == "app"
    assert record["domain"] == "locks"
    assert "timestamp" in record


def test_database_field_omitted_without_name():
    stream = io.StringIO()
    logger = setup_logger("pgmetrics.test.nodb", "INFO", stream=stream)

    logger.warning("No database")

    [record] = _records(stream)
    assert "database" not in record


def test_level_filters_records():
    stream = io.StringIO()
    logger = setup_logger("pgmetrics.test.level", "warning", stream=stream)

    logger.info("hidden")
    logger.error("shown")

    assert [r["message"] for r in _records(stream)] == ["shown"]


def test_repeated_setup_replaces_handler():
    first = io.StringIO()
    second = io.StringIO()
    setup_logger("pgmetrics.test.repeat", "INFO", stream=first)
    logger = setup_logger("pgmetrics.test.repeat", "INFO", stream=second)

    logger.info("once")

    assert len(logger.handlers) == 1
    assert first.getvalue() == ""
    assert len(_records(second)) == 1
    assert logger.propagate is False
