"""Base collector abstract class for all metric domains."""

from abc import ABC, abstractmethod
from typing import List, Optional
import logging
from functools import wraps

from ..context import RunContext
from ..utils.errors import ParseShortfallError
from ..utils.metrics import CollectorResult, Metric
from .parsers import build_column_query, parse_columns, parse_rows, parse_single_value, quote_literal


class BaseCollector(ABC):
    """Abstract base class for all collectors."""

    domain: str = ""

    def __init__(self, context: RunContext, logger: logging.Logger):
        """
        Initialize base collector.

        Args:
            context: Run context holding the runner and the metric sink
            logger: Logger instance
        """
        self.context = context
        self.parent_logger = logger
        self.logger = logger.getChild(self.__class__.__name__)
        self._result: Optional[CollectorResult] = None

    @property
    def database_name(self) -> str:
        return self.context.database_name

    @property
    def database_literal(self) -> str:
        """Configured database name quoted for use inside SQL."""
        return quote_literal(self.context.database_name)

    @abstractmethod
    async def collect(self) -> CollectorResult:
        """
        Run the domain's queries and append metrics to the sink.

        Returns:
            CollectorResult: Metrics produced and steps that failed

        Note:
            Implementations should use @safe_collect so an unexpected error
            never aborts the rest of the run.
        """
        pass

    def _new_result(self) -> CollectorResult:
        """Start this run's result; safe_collect returns it if collect() raises."""
        self._result = CollectorResult(domain=self.domain)
        return self._result

    def _record(self, result: CollectorResult, metrics: List[Metric]) -> None:
        self.context.sink.extend(metrics)
        result.metrics.extend(metrics)

    async def _query(self, result: CollectorResult, step: str, sql: str) -> Optional[str]:
        """
        Run a query, recording a failure on the result instead of raising.

        Returns:
            Optional[str]: Query text, or None when the query failed
        """
        outcome = await self.context.runner.run_async(sql)
        if not outcome.ok:
            self.logger.debug(f"Skipping {step}: {outcome.error}")
            result.failures.append(f"{step}: {outcome.error}")
            return None
        return outcome.text

    async def _single_value(self, result: CollectorResult, point: str, sql: str) -> None:
        text = await self._query(result, point, sql)
        if text is not None:
            self._record(result, parse_single_value(point, text))

    async def _columns(
        self,
        result: CollectorResult,
        prefix: str,
        table: str,
        where: str,
        aggregate: str,
        columns: List[str]
    ) -> None:
        """Select a fixed column list and store one metric per column."""
        sql = build_column_query(table, where, aggregate, columns)
        text = await self._query(result, prefix, sql)
        if text is None:
            return

        try:
            metrics = parse_columns(prefix, text, columns)
        except ParseShortfallError as e:
            self.logger.warning(f"Discarding {table} row for {prefix}: {e}")
            result.failures.append(f"{prefix}: {e}")
            return

        self._record(result, metrics)

    async def _rows(self, result: CollectorResult, prefix: str, sql: str) -> None:
        """Store one metric per key|value row."""
        text = await self._query(result, prefix, sql)
        if text is None:
            return

        metrics, skipped = parse_rows(prefix, text)
        for row in skipped:
            self.logger.warning(f"Skipping malformed row for {prefix}: {row!r}")
            result.failures.append(f"{prefix}: malformed row {row!r}")

        self._record(result, metrics)


def safe_collect(func):
    """
    Decorator to handle collector exceptions gracefully.

    The result started with _new_result() is returned with its error set,
    so metrics and step failures recorded before the exception are kept.

    Args:
        func: Collector method to wrap

    Returns:
        Wrapped function that catches exceptions
    """
    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        self._result = None
        try:
            return await func(self, *args, **kwargs)
        except Exception as e:
            self.logger.error(f"Collection failed: {e}", exc_info=True)
            result = self._result or CollectorResult(domain=self.domain)
            result.error = str(e)
            return result
    return wrapper
