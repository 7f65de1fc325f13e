"""Shared pytest configuration and fixtures."""

import pytest

from pgmetrics.context import RunContext
from pgmetrics.utils.logger import setup_logger
from pgmetrics.utils.metrics import QueryOutcome


class FakeRunner:
    """
    Scripted stand-in for PsqlRunner.

    Responses map an SQL fragment to either output text or a QueryOutcome;
    the first fragment contained in the query wins. Unmatched queries fail.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.queries = []

    def run(self, sql):
        self.queries.append(sql)
        for fragment, response in self.responses.items():
            if fragment in sql:
                if isinstance(response, QueryOutcome):
                    return response
                return QueryOutcome.success(response)
        return QueryOutcome.failure("no scripted response")

    async def run_async(self, sql):
        return self.run(sql)

    def is_available(self):
        return True

    def ran(self, fragment):
        """Number of executed queries containing *fragment*."""
        return sum(1 for sql in self.queries if fragment in sql)


@pytest.fixture
def logger():
    """Create logger for tests."""
    return setup_logger("test", "DEBUG")


@pytest.fixture
def make_context():
    """Factory for a fresh RunContext backed by a FakeRunner."""
    def _make(responses=None, database_name="sensu", user_name="sensu"):
        return RunContext(
            database_name=database_name,
            user_name=user_name,
            runner=FakeRunner(responses),
            timestamp=1700000000
        )
    return _make


@pytest.fixture
def fake_runner_class():
    return FakeRunner
