"""Replication role/type inference and replication delay."""

from dataclasses import dataclass
from enum import IntEnum

from ..utils.metrics import CollectorResult, Metric
from .base import BaseCollector, safe_collect
from .version_collector import VersionCollector

RECOVERY_QUERY = "select pg_is_in_recovery();"
LOGICAL_PUBLISHER_QUERY = (
    "select slot_type from pg_replication_slots where slot_type='logical' and active='t';"
)
STREAMING_MASTER_QUERY = "select state from pg_stat_replication WHERE state='streaming';"
STREAMING_SLAVE_QUERY = "select status from pg_stat_wal_receiver WHERE status='streaming';"
LOGICAL_SUBSCRIBER_QUERY = (
    "select wait_event from pg_stat_activity WHERE wait_event='LogicalApplyMain';"
)

LOGICAL_DELAY_QUERY = (
    "SELECT (pg_current_wal_lsn() - confirmed_flush_lsn) AS lsn_distance FROM pg_replication_slots;"
)
PHYSICAL_DELAY_QUERY = (
    "select (extract(epoch from (now()-pg_last_xact_replay_timestamp()))*1000)::bigint"
    " as replication_delay;"
)


class ReplicationRole(IntEnum):
    STANDALONE = 0
    PRIMARY = 1
    SECONDARY = 2


class ReplicationType(IntEnum):
    NONE = 0
    WAL = 1
    STREAMING = 2
    LOGICAL = 3


@dataclass(frozen=True)
class ReplicationProbe:
    """Independent yes/no observations about the server's replication state."""

    in_recovery_mode: bool = False
    is_logical_publisher: bool = False
    is_streaming_master: bool = False
    is_streaming_slave: bool = False
    is_logical_subscriber: bool = False


def determine_role(probe: ReplicationProbe) -> ReplicationRole:
    """First matching branch wins: primary, then secondary, then standalone."""
    if probe.is_streaming_master or probe.is_logical_publisher:
        return ReplicationRole.PRIMARY
    elif probe.is_streaming_slave or probe.is_logical_subscriber:
        return ReplicationRole.SECONDARY
    return ReplicationRole.STANDALONE


def determine_type(probe: ReplicationProbe) -> ReplicationType:
    """
    Classify replication type.

    WAL shipping is a server in recovery without a WAL receiver streaming;
    that check precedes streaming, which precedes logical.
    """
    if probe.in_recovery_mode and not probe.is_streaming_slave:
        return ReplicationType.WAL
    elif probe.is_streaming_master or probe.is_streaming_slave:
        return ReplicationType.STREAMING
    elif probe.is_logical_publisher or probe.is_logical_subscriber:
        return ReplicationType.LOGICAL
    return ReplicationType.NONE


class ReplicationCollector(BaseCollector):
    """
    Infers replication topology from five probes.

    Points: replication.delay (publisher or recovery only), and once the
    server version is known, replication.role and replication.type.
    """

    domain = "replication"

    async def _validate(self, sql: str, expected: str) -> bool:
        """Probe: True only when the query succeeds and its text equals *expected*."""
        outcome = await self.context.runner.run_async(sql)
        matched = outcome.ok and outcome.text == expected
        self.logger.debug(f"Probe {expected} = {matched}")
        return matched

    async def probe(self) -> ReplicationProbe:
        """Run the probe queries, skipping the ones already ruled out."""
        in_recovery_mode = await self._validate(RECOVERY_QUERY, "t")
        is_logical_publisher = await self._validate(LOGICAL_PUBLISHER_QUERY, "logical")

        is_streaming_master = False
        if not is_logical_publisher:
            is_streaming_master = await self._validate(STREAMING_MASTER_QUERY, "streaming")

        is_streaming_slave = await self._validate(STREAMING_SLAVE_QUERY, "streaming")

        is_logical_subscriber = False
        if not is_streaming_slave:
            is_logical_subscriber = await self._validate(
                LOGICAL_SUBSCRIBER_QUERY, "LogicalApplyMain"
            )

        return ReplicationProbe(
            in_recovery_mode=in_recovery_mode,
            is_logical_publisher=is_logical_publisher,
            is_streaming_master=is_streaming_master,
            is_streaming_slave=is_streaming_slave,
            is_logical_subscriber=is_logical_subscriber,
        )

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        probe = await self.probe()

        if probe.is_logical_publisher:
            await self._single_value(result, "replication.delay", LOGICAL_DELAY_QUERY)

        if probe.in_recovery_mode:
            await self._single_value(result, "replication.delay", PHYSICAL_DELAY_QUERY)

        if self.context.server_version == 0:
            version_result = await VersionCollector(self.context, self.parent_logger).collect()
            result.metrics.extend(version_result.metrics)
            result.failures.extend(version_result.failures)

        if self.context.server_version > 0:
            role = determine_role(probe)
            replication_type = determine_type(probe)
            self.logger.debug(f"Replication role {role.name}, type {replication_type.name}")
            self._record(result, [
                Metric("replication.role", str(int(role))),
                Metric("replication.type", str(int(replication_type))),
            ])
        else:
            result.failures.append("replication.role: server version unknown")

        return result
