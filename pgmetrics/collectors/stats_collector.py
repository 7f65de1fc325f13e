"""Statistics views: per-database, table I/O and table access counters."""

from ..utils.metrics import CollectorResult
from .base import BaseCollector, safe_collect

STATSDB_COLUMNS = [
    "numbackends", "xact_commit", "xact_rollback", "blks_read", "blks_hit",
    "tup_returned", "tup_fetched", "tup_inserted", "tup_updated", "tup_deleted",
    "conflicts", "temp_files", "temp_bytes", "deadlocks", "blk_read_time",
    "blk_write_time",
]

STATSIO_COLUMNS = [
    "heap_blks_read", "heap_blks_hit", "idx_blks_read", "idx_blks_hit",
    "toast_blks_read", "toast_blks_hit", "tidx_blks_read", "tidx_blks_hit",
]

STATSTABLE_COLUMNS = [
    "seq_scan", "seq_tup_read", "idx_scan", "idx_tup_fetch", "n_tup_ins",
    "n_tup_upd", "n_tup_del", "n_tup_hot_upd", "n_live_tup", "n_dead_tup",
]


class StatsDbCollector(BaseCollector):
    """pg_stat_database row for the configured database."""

    domain = "statsdb"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        await self._columns(
            result, f"statsdb.{self.database_name}.", "pg_stat_database",
            f"where datname = {self.database_literal}", "", STATSDB_COLUMNS
        )
        return result


class StatsIoCollector(BaseCollector):
    """pg_statio_user_tables summed over all user tables."""

    domain = "statsio"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        await self._columns(
            result, f"statsio.{self.database_name}.", "pg_statio_user_tables",
            "", "sum", STATSIO_COLUMNS
        )
        return result


class StatsTableCollector(BaseCollector):
    """pg_stat_user_tables summed over all user tables."""

    domain = "statstable"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        await self._columns(
            result, f"statstable.{self.database_name}.", "pg_stat_user_tables",
            "", "sum", STATSTABLE_COLUMNS
        )
        return result
