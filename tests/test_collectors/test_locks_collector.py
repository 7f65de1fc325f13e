"""Tests for the locks collector."""

import pytest

from pgmetrics.collectors.locks_collector import LocksCollector
from pgmetrics.utils.metrics import QueryOutcome


@pytest.mark.asyncio
async def test_locks_per_mode_and_total(make_context, logger):
    context = make_context({
        "from pg_locks": "AccessShareLock|5\nRowExclusiveLock|2\nExclusiveLock|1",
    })

    result = await LocksCollector(context, logger).collect()

    assert [(m.point, m.value) for m in context.sink] == [
        ("locks.sensu.accesssharelock", "5"),
        ("locks.sensu.rowexclusivelock", "2"),
        ("locks.sensu.exclusivelock", "1"),
        ("locks.sensu.total", "8.000000"),
    ]
    assert result.complete


@pytest.mark.asyncio
async def test_locks_empty_row_set_total_zero(make_context, logger):
    context = make_context({"from pg_locks": ""})

    await LocksCollector(context, logger).collect()

    assert [(m.point, m.value) for m in context.sink] == [("locks.sensu.total", "0.000000")]


@pytest.mark.asyncio
async def test_locks_query_failure_total_zero(make_context, logger):
    context = make_context({"from pg_locks": QueryOutcome.failure("exit code 2")})

    result = await LocksCollector(context, logger).collect()

    assert context.sink.last("locks.sensu.total").value == "0.000000"
    assert len(result.failures) == 1


@pytest.mark.asyncio
async def test_locks_total_ignores_other_databases(make_context, logger):
    context = make_context({"from pg_locks": "AccessShareLock|4"})
    context.sink.add("locks.other.accesssharelock", "100")
    context.sink.add("locks.sensuextra.accesssharelock", "50")

    await LocksCollector(context, logger).collect()

    assert context.sink.last("locks.sensu.total").value == "4.000000"


@pytest.mark.asyncio
async def test_locks_query_filters_database(make_context, logger):
    context = make_context({"from pg_locks": ""}, database_name="app")

    await LocksCollector(context, logger).collect()

    assert "where datname = 'app'" in context.runner.queries[0]
    assert "group by mode" in context.runner.queries[0]


@pytest.mark.asyncio
async def test_locks_mixed_case_database(make_context, logger):
    context = make_context({"from pg_locks": "AccessShareLock|3\nShareLock|2"}, database_name="AppDB")

    await LocksCollector(context, logger).collect()

    assert context.sink.last("locks.appdb.total").value == "5.000000"
