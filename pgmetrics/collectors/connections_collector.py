"""Connection counts from pg_stat_activity."""

from ..utils.metrics import CollectorResult
from .base import BaseCollector, safe_collect

CONNECTION_STATES = [
    "active",
    "disabled",
    "idle",
    "idle in transaction",
    "idle in transaction (aborted)",
    "fastpath function call",
]

_STATE_QUERY = "select count(*) from pg_stat_activity where state = '{state}';"


def state_point_name(state: str) -> str:
    """Turn a backend state into a point segment: "idle in transaction (aborted)" -> "idle_in_transaction_aborted"."""
    return state.replace(" ", "_").replace("(", "").replace(")", "")


class ConnectionsCollector(BaseCollector):
    """
    Counts backends in total, waiting on an event, and per state.

    Points: connections.<db>.total, connections.<db>.waiting and
    connections.<db>.<state> for every entry in CONNECTION_STATES.
    """

    domain = "connections"

    @safe_collect
    async def collect(self) -> CollectorResult:
        result = self._new_result()
        prefix = f"connections.{self.database_name}."

        await self._single_value(
            result, prefix + "total",
            "select count(*) from pg_stat_activity;"
        )
        await self._single_value(
            result, prefix + "waiting",
            "select count(*) from pg_stat_activity where wait_event_type is not null;"
        )

        for state in CONNECTION_STATES:
            await self._single_value(
                result, prefix + state_point_name(state),
                _STATE_QUERY.format(state=state)
            )

        return result
