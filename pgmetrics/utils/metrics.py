"""Metric data structures shared by collectors."""

from dataclasses import dataclass, field
from typing import Optional, List, Iterator
import time


@dataclass(frozen=True)
class Metric:
    """A single metric point and its textual value."""

    point: str  # Dot-delimited, lower-cased
    value: str

    def __post_init__(self):
        """Normalize point case and map empty values to "0"."""
        object.__setattr__(self, "point", self.point.lower())
        if self.value is None or self.value == "":
            object.__setattr__(self, "value", "0")


@dataclass(frozen=True)
class QueryOutcome:
    """Result of one external query: text on success, a reason on failure."""

    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str) -> "QueryOutcome":
        return cls(text=text)

    @classmethod
    def failure(cls, reason: str) -> "QueryOutcome":
        return cls(error=reason or "query failed")


class MetricSink:
    """
    Ordered, append-only metric list for one collection run.

    Duplicate points are kept; lookups return the last-added match.
    """

    def __init__(self):
        self._metrics: List[Metric] = []

    def add(self, point: str, value: str) -> Metric:
        """Append a metric and return it."""
        metric = Metric(point, value)
        self._metrics.append(metric)
        return metric

    def extend(self, metrics: List[Metric]) -> None:
        self._metrics.extend(metrics)

    def last(self, point: str) -> Optional[Metric]:
        """Return the last metric whose point equals *point*, or None."""
        for metric in reversed(self._metrics):
            if metric.point == point:
                return metric
        return None

    def with_prefix(self, prefix: str) -> List[Metric]:
        """Return all metrics whose point starts with *prefix*, in insertion order."""
        return [m for m in self._metrics if m.point.startswith(prefix)]

    def __iter__(self) -> Iterator[Metric]:
        return iter(list(self._metrics))

    def __len__(self) -> int:
        return len(self._metrics)


@dataclass
class CollectorResult:
    """What one collector produced and which steps it could not complete."""

    domain: str
    metrics: List[Metric] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)  # Human-readable step failures
    error: Optional[str] = None  # Unexpected exception, collector aborted
    timestamp: Optional[float] = None

    def __post_init__(self):
        """Set timestamp if not provided."""
        if self.timestamp is None:
            self.timestamp = time.time()

    @property
    def complete(self) -> bool:
        """True when every step produced its metrics."""
        return not self.failures and self.error is None


def to_float(value: Optional[str]) -> float:
    """
    Parse a stored metric value as a float.

    Args:
        value: Metric text as stored in the sink

    Returns:
        float: Parsed value, or 0.0 when the text is not numeric
    """
    if value is None:
        return 0.0
    try:
        return float(value.strip())
    except (TypeError, ValueError):
        return 0.0
