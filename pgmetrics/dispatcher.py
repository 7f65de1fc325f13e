"""Maps metric domain names to collectors and runs them."""

import logging
from typing import Dict, List, Optional, Type

from .context import RunContext
from .utils.errors import ConfigurationError
from .utils.logger import setup_logger
from .utils.metrics import CollectorResult, Metric

from .collectors.base import BaseCollector
from .collectors.version_collector import VersionCollector
from .collectors.bgwriter_collector import BgwriterCollector
from .collectors.connections_collector import ConnectionsCollector
from .collectors.locks_collector import LocksCollector
from .collectors.replication_collector import ReplicationCollector
from .collectors.size_collector import SizeCollector
from .collectors.stats_collector import StatsDbCollector, StatsIoCollector, StatsTableCollector


# Catalog order is the default run order
COLLECTORS: Dict[str, Type[BaseCollector]] = {
    "version": VersionCollector,
    "bgwriter": BgwriterCollector,
    "connections": ConnectionsCollector,
    "locks": LocksCollector,
    "replication": ReplicationCollector,
    "size": SizeCollector,
    "statsdb": StatsDbCollector,
    "statsio": StatsIoCollector,
    "statstable": StatsTableCollector,
}

DOMAINS: List[str] = list(COLLECTORS)


def check_domain(point: str) -> str:
    """Domain part of a check point: "connections.sensu.total" -> "connections"."""
    return point.split(".")[0]


def validate_domains(domains: List[str]) -> None:
    """
    Reject unknown domain names.

    Raises:
        ConfigurationError: On the first name missing from the catalog
    """
    for domain in domains:
        if domain not in COLLECTORS:
            raise ConfigurationError(f"metric domain not supported: {domain}")


class Dispatcher:
    """
    Runs collectors against one RunContext.

    Collectors run one after another so that order-dependent metrics
    (locks total, version-gated replication role) see their inputs.
    """

    def __init__(self, context: RunContext, logger: Optional[logging.Logger] = None):
        self.context = context
        self.logger = logger or setup_logger("dispatcher")

    def collector_for(self, domain: str) -> BaseCollector:
        validate_domains([domain])
        return COLLECTORS[domain](self.context, self.logger)

    async def run_all(self, domains: Optional[List[str]] = None) -> List[CollectorResult]:
        """
        Run every requested domain in order.

        Args:
            domains: Domain names, defaults to the full catalog

        Returns:
            List[CollectorResult]: One result per domain

        Raises:
            ConfigurationError: If any name is unknown; raised before any query runs
        """
        domains = DOMAINS if domains is None else domains
        validate_domains(domains)

        results = []
        for domain in domains:
            self.logger.debug(f"Collecting {domain}")
            result = await self.collector_for(domain).collect()
            if result.failures:
                self.logger.debug(f"{domain}: {len(result.failures)} step(s) produced no metric")
            results.append(result)
        return results

    async def run_single(self, point: str) -> Optional[Metric]:
        """
        Run only the domain of *point* and look the point up.

        Returns:
            Optional[Metric]: Last metric whose point equals *point*, or None

        Raises:
            ConfigurationError: If the point's domain is unknown
        """
        domain = check_domain(point)
        collector = self.collector_for(domain)
        self.logger.debug(f"Collecting {domain} for check {point}")
        await collector.collect()
        return self.context.sink.last(point)
