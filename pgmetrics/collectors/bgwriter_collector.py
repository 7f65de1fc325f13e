"""Background writer and checkpointer counters."""

from ..utils.metrics import CollectorResult
from .base import BaseCollector, safe_collect

BGWRITER_COLUMNS = [
    "checkpoints_timed",
    "checkpoints_req",
    "checkpoint_write_time",
    "checkpoint_sync_time",
    "buffers_checkpoint",
    "buffers_clean",
    "maxwritten_clean",
    "buffers_backend",
    "buffers_backend_fsync",
    "buffers_alloc",
]


class BgwriterCollector(BaseCollector):
    """Collects pg_stat_bgwriter counters as bgwriter.<column>."""

    domain = "bgwriter"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        await self._columns(result, "bgwriter.", "pg_stat_bgwriter", "", "", BGWRITER_COLUMNS)
        return result
