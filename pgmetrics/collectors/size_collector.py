"""Database size collector."""

from ..utils.metrics import CollectorResult
from .base import BaseCollector, safe_collect


class SizeCollector(BaseCollector):
    """Collects size.<db> in bytes."""

    domain = "size"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        await self._single_value(
            result, f"size.{self.database_name}",
            f"select pg_database_size({self.database_literal});"
        )
        return result
