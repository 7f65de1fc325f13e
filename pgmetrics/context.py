"""Per-run state threaded through every collector."""

import time
from dataclasses import dataclass, field

from .collectors.query_runner import PsqlRunner
from .utils.metrics import MetricSink


@dataclass
class RunContext:
    """
    State for one collection run.

    A fresh context is created per invocation: the sink starts empty,
    the server version starts unknown (0) and the timestamp is fixed
    once for every printed line.
    """

    database_name: str
    user_name: str
    runner: PsqlRunner
    timestamp: int = field(default_factory=lambda: int(time.time()))
    server_version: float = 0.0
    sink: MetricSink = field(default_factory=MetricSink)
