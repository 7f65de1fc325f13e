"""Formatting of metric lines and check verdicts."""

import socket
import sys
from typing import TextIO

from ..utils.metrics import Metric, MetricSink
from ..utils.status import CheckState
from .threshold_evaluator import CheckVerdict


def resolve_hostname() -> str:
    """Host name with dots replaced by dashes, "" if it cannot be read."""
    try:
        hostname = socket.gethostname()
    except OSError:
        return ""
    return hostname.replace(".", "-")


def metric_namespace(hostname: str) -> str:
    return f"{hostname}.postgresql."


def format_metric_line(namespace: str, metric: Metric, timestamp: int) -> str:
    """Graphite plaintext line: "<namespace><point> <value> <timestamp>"."""
    return f"{namespace}{metric.point} {metric.value} {timestamp}"


def print_metrics(
    sink: MetricSink,
    namespace: str,
    timestamp: int,
    stream: TextIO = None
) -> int:
    """
    Write every metric in insertion order.

    Returns:
        int: Number of lines written
    """
    stream = stream or sys.stdout
    count = 0
    for metric in sink:
        print(format_metric_line(namespace, metric, timestamp), file=stream)
        count += 1
    return count


def format_verdict(verdict: CheckVerdict) -> str:
    """Render "CRITICAL: <point> = <value>" or the not-found message."""
    if verdict.state == CheckState.NOT_FOUND:
        return f"point not found: {verdict.point}"
    return f"{verdict.state.name}: {verdict.point} = {verdict.value:f}"
