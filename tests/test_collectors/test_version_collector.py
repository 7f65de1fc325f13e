"""Tests for the version collector."""

import pytest

from pgmetrics.collectors.version_collector import VersionCollector, parse_server_version
from pgmetrics.utils.metrics import QueryOutcome


@pytest.mark.parametrize("text, expected", [
    ("13.4 (Debian 13.4-1.pgdg100+1)", 13.4),
    ("9.6.24", 9.6),
    ("16beta1", 16.0),
    ("15.2", 15.2),
    ("unknown", 0.0),
    ("", 0.0),
])
def test_parse_server_version(text, expected):
    assert parse_server_version(text) == expected


@pytest.mark.asyncio
async def test_version_collector_stores_version(make_context, logger):
    context = make_context({"show server_version;": "13.4 (Debian 13.4-1.pgdg100+1)"})

    result = await VersionCollector(context, logger).collect()

    assert context.server_version == 13.4
    assert context.sink.last("version").value == "13.400000"
    assert [m.point for m in result.metrics] == ["version"]


@pytest.mark.asyncio
async def test_version_collector_failure_adds_nothing(make_context, logger):
    context = make_context({"show server_version;": QueryOutcome.failure("exit code 2")})

    result = await VersionCollector(context, logger).collect()

    assert len(context.sink) == 0
    assert context.server_version == 0
    assert result.failures
