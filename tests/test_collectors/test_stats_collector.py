"""Tests for column-based collectors: bgwriter, size and the stats views."""

import pytest

from pgmetrics.collectors.bgwriter_collector import BgwriterCollector, BGWRITER_COLUMNS
from pgmetrics.collectors.size_collector import SizeCollector
from pgmetrics.collectors.stats_collector import (
    StatsDbCollector,
    StatsIoCollector,
    StatsTableCollector,
    STATSDB_COLUMNS,
    STATSIO_COLUMNS,
    STATSTABLE_COLUMNS,
)


def row(columns):
    """Pipe-delimited row with values 0..n-1."""
    return "|".join(str(i) for i in range(len(columns)))


@pytest.mark.asyncio
@pytest.mark.parametrize("collector_class, table, prefix, columns", [
    (BgwriterCollector, "pg_stat_bgwriter", "bgwriter.", BGWRITER_COLUMNS),
    (StatsDbCollector, "pg_stat_database", "statsdb.sensu.", STATSDB_COLUMNS),
    (StatsIoCollector, "pg_statio_user_tables", "statsio.sensu.", STATSIO_COLUMNS),
    (StatsTableCollector, "pg_stat_user_tables", "statstable.sensu.", STATSTABLE_COLUMNS),
])
async def test_column_collectors_zip_positionally(
    make_context, logger, collector_class, table, prefix, columns
):
    context = make_context({f"from {table}": row(columns)})

    result = await collector_class(context, logger).collect()

    assert len(result.metrics) == len(columns)
    for i, (metric, column) in enumerate(zip(context.sink, columns)):
        assert metric.point == prefix + column
        assert metric.value == str(i)


def test_column_list_sizes():
    assert len(BGWRITER_COLUMNS) == 10
    assert len(STATSDB_COLUMNS) == 16
    assert len(STATSIO_COLUMNS) == 8
    assert len(STATSTABLE_COLUMNS) == 10


@pytest.mark.asyncio
async def test_statsdb_filters_database(make_context, logger):
    context = make_context({"from pg_stat_database": row(STATSDB_COLUMNS)}, database_name="app")

    await StatsDbCollector(context, logger).collect()

    sql = context.runner.queries[0]
    assert sql.startswith("select numbackends, xact_commit,")
    assert sql.endswith("from pg_stat_database where datname = 'app';")


@pytest.mark.asyncio
async def test_statsio_uses_sum(make_context, logger):
    context = make_context({"from pg_statio_user_tables": row(STATSIO_COLUMNS)})

    await StatsIoCollector(context, logger).collect()

    assert context.runner.queries[0].startswith("select sum(heap_blks_read), sum(heap_blks_hit),")


@pytest.mark.asyncio
async def test_short_row_emits_no_metrics(make_context, logger):
    context = make_context({"from pg_stat_user_tables": "1|2|3"})

    result = await StatsTableCollector(context, logger).collect()

    assert len(context.sink) == 0
    assert result.failures == ["statstable.sensu.: expected 10 fields, got 3"]


@pytest.mark.asyncio
async def test_bgwriter_query_failure(make_context, logger):
    context = make_context()

    result = await BgwriterCollector(context, logger).collect()

    assert len(context.sink) == 0
    assert len(result.failures) == 1
    assert result.error is None


@pytest.mark.asyncio
async def test_size_collector(make_context, logger):
    context = make_context({"pg_database_size": "8413991"}, database_name="app")

    await SizeCollector(context, logger).collect()

    assert context.sink.last("size.app").value == "8413991"
    assert context.runner.queries == ["select pg_database_size('app');"]
