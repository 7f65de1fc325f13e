"""Lock counts per mode for the configured database."""

from ..utils.metrics import CollectorResult, Metric, to_float
from .base import BaseCollector, safe_collect


class LocksCollector(BaseCollector):
    """Collects locks.<db>.<mode> rows and a derived locks.<db>.total."""

    domain = "locks"

    def lock_query(self) -> str:
        return (
            "select mode, count(mode) as count from pg_locks where database = "
            f"(select oid from pg_database where datname = {self.database_literal}) "
            "group by mode;"
        )

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        prefix = f"locks.{self.database_name}.".lower()
        total_point = prefix + "total"

        await self._rows(result, prefix, self.lock_query())

        # Sum what is in the sink now, after the rows have been appended
        count = sum(
            to_float(metric.value)
            for metric in self.context.sink.with_prefix(prefix)
            if metric.point != total_point
        )
        self._record(result, [Metric(total_point, f"{count:f}")])

        return result
