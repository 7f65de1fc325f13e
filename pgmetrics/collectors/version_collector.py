"""Server version collector."""

import re

from ..utils.metrics import CollectorResult, Metric
from .base import BaseCollector, safe_collect

VERSION_QUERY = "show server_version;"

_LEADING_NUMBER = re.compile(r"^\d+(?:\.\d+)?")


def parse_server_version(text: str) -> float:
    """
    Parse the leading numeric token of ``show server_version`` output.

    "13.4 (Debian 13.4-1.pgdg100+1)" gives 13.4, "16beta1" gives 16.0 and
    anything without a leading number gives 0.0.
    """
    token = text.strip().split(" ")[0]
    match = _LEADING_NUMBER.match(token)
    if not match:
        return 0.0
    return float(match.group(0))


class VersionCollector(BaseCollector):
    """Collects the server version and records it on the run context."""

    domain = "version"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()

        text = await self._query(result, "version", VERSION_QUERY)
        if text is None:
            return result

        self.context.server_version = parse_server_version(text)
        self.logger.debug(f"Server version: {self.context.server_version}")
        self._record(result, [Metric("version", f"{self.context.server_version:f}")])
        return result
