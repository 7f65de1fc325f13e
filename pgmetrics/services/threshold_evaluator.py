"""Threshold classification for a single collected metric."""

from dataclasses import dataclass
from typing import Optional

from ..config.models import ThresholdsConfig
from ..utils.metrics import MetricSink, to_float
from ..utils.status import CheckState


@dataclass(frozen=True)
class CheckVerdict:
    """Outcome of evaluating one point against its thresholds."""

    state: CheckState
    point: str
    value: Optional[float] = None  # None when the point was not found


def classify(value: float, thresholds: ThresholdsConfig) -> CheckState:
    """Both boundaries are inclusive; critical is tested first."""
    if value >= thresholds.critical:
        return CheckState.CRITICAL
    elif value >= thresholds.warning:
        return CheckState.WARNING
    return CheckState.OK


def evaluate(sink: MetricSink, point: str, thresholds: ThresholdsConfig) -> CheckVerdict:
    """
    Classify the last collected value of *point*.

    Args:
        sink: Metrics collected during this run
        point: Exact point name to look up
        thresholds: Warning and critical boundaries

    Returns:
        CheckVerdict: NOT_FOUND when no metric has that point, otherwise
        OK/WARNING/CRITICAL with the parsed value (unparsable text is 0)
    """
    metric = sink.last(point)
    if metric is None:
        return CheckVerdict(state=CheckState.NOT_FOUND, point=point)

    value = to_float(metric.value)
    return CheckVerdict(state=classify(value, thresholds), point=point, value=value)
