"""psql client wrapper used by every collector."""

import asyncio
import logging
import shutil
import subprocess
from typing import List, Optional

from ..utils.metrics import QueryOutcome


class PsqlRunner:
    """
    Run one SQL statement per psql invocation.

    Output is requested tuples-only and unaligned, so rows are separated
    by newlines and fields by "|". Nothing is retried or cached.
    """

    def __init__(
        self,
        database_name: str,
        user_name: str,
        psql_path: str = "psql",
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize runner.

        Args:
            database_name: Database passed to psql
            user_name: Role passed with -U
            psql_path: psql executable name or path
            timeout: Per-query timeout in seconds, None to wait forever
            logger: Optional logger instance
        """
        self.database_name = database_name
        self.user_name = user_name
        self.psql_path = psql_path
        self.timeout = timeout or None
        self.logger = logger or logging.getLogger(__name__)

    def build_command(self, sql: str) -> List[str]:
        return [
            self.psql_path, self.database_name,
            "-U", self.user_name,
            "-t", "-A",
            "-c", sql
        ]

    def run(self, sql: str) -> QueryOutcome:
        """
        Execute SQL and return its output.

        Args:
            sql: A single SQL statement

        Returns:
            QueryOutcome: Text with the trailing newline removed, or a failure
        """
        self.logger.debug(f"Running query: {sql}")

        try:
            completed = subprocess.run(
                self.build_command(sql),
                capture_output=True,
                timeout=self.timeout
            )
        except subprocess.TimeoutExpired:
            self.logger.warning(f"Query timed out after {self.timeout}s: {sql}")
            return QueryOutcome.failure(f"timed out after {self.timeout}s")
        except OSError as e:
            self.logger.warning(f"Failed to start {self.psql_path}: {e}")
            return QueryOutcome.failure(str(e))

        stdout = completed.stdout.decode('utf-8', errors='replace')
        if stdout.endswith("\n"):
            stdout = stdout[:-1]

        if completed.returncode != 0:
            stderr = completed.stderr.decode('utf-8', errors='replace').strip()
            self.logger.debug(f"Query failed with exit code {completed.returncode}: {stderr}")
            return QueryOutcome.failure(
                f"exit code {completed.returncode}: {stderr}" if stderr
                else f"exit code {completed.returncode}"
            )

        self.logger.debug(f"Query result: {stdout}")
        return QueryOutcome.success(stdout)

    async def run_async(self, sql: str) -> QueryOutcome:
        """Run a query in the thread pool so collectors do not block the loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.run, sql)

    def is_available(self) -> bool:
        """
        Check if the psql executable can be found.

        Returns:
            bool: True if psql is on PATH (or the configured path exists)
        """
        return shutil.which(self.psql_path) is not None
