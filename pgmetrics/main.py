"""Command line entry point for the PostgreSQL check and metrics plugin."""

import argparse
import asyncio
import logging
import os
import sys
from typing import List, Optional, TextIO

import yaml
from pydantic import ValidationError

from .collectors.query_runner import PsqlRunner
from .config.loader import ConfigLoader
from .config.models import PluginConfig
from .context import RunContext
from .dispatcher import Dispatcher, DOMAINS
from .services.output import format_verdict, metric_namespace, print_metrics, resolve_hostname
from .services.threshold_evaluator import evaluate
from .utils.errors import ConfigurationError
from .utils.logger import setup_logger
from .utils.status import CheckState

EXIT_OK = 0
EXIT_WARNING = 1


class PostgresPlugin:
    """
    One invocation of the plugin.

    Runs either every configured metric domain (metrics mode) or the
    domain of a single point compared against thresholds (check mode).
    """

    def __init__(
        self,
        config: PluginConfig,
        logger: logging.Logger,
        runner: Optional[PsqlRunner] = None,
        stdout: Optional[TextIO] = None,
        hostname: Optional[str] = None
    ):
        """
        Initialize plugin.

        Args:
            config: Validated configuration
            logger: Logger instance
            runner: Query runner, defaults to a PsqlRunner built from config
            stdout: Stream for metric lines and verdicts
            hostname: Namespace host, defaults to the resolved host name
        """
        self.config = config
        self.logger = logger
        self.stdout = stdout or sys.stdout
        self.hostname = resolve_hostname() if hostname is None else hostname

        if runner is None:
            runner = PsqlRunner(
                config.database_name,
                config.user_name,
                psql_path=config.psql_path,
                timeout=config.query_timeout,
                logger=logger.getChild("PsqlRunner")
            )
            if not runner.is_available():
                self.logger.warning(f"{config.psql_path} not found on PATH, queries will fail")

        self.context = RunContext(
            database_name=config.database_name,
            user_name=config.user_name,
            runner=runner
        )
        self.dispatcher = Dispatcher(self.context, logger)

    async def execute(self) -> int:
        """
        Run the configured mode.

        Returns:
            int: Process exit code
        """
        self.logger.debug(
            "Executing with",
            extra={"database": self.config.database_name, "username": self.config.user_name}
        )
        if self.config.check:
            return await self.run_check()
        return await self.run_metrics()

    async def run_check(self) -> int:
        """Collect the check's domain and classify the requested point."""
        point = self.config.check
        self.logger.debug(
            "Checking single point",
            extra={
                "check": point,
                "warning": self.config.warning,
                "critical": self.config.critical
            }
        )

        await self.dispatcher.run_single(point)
        verdict = evaluate(self.context.sink, point, self.config.thresholds)

        if verdict.state == CheckState.NOT_FOUND:
            # Show what was collected before reporting the miss
            print_metrics(self.context.sink, "", self.context.timestamp, self.stdout)
            print(f"Error: {format_verdict(verdict)}", file=self.stdout)
            return verdict.state.to_exit_code()

        print(format_verdict(verdict), file=self.stdout)
        return verdict.state.to_exit_code()

    async def run_metrics(self) -> int:
        """Collect every configured domain and print the metric lines."""
        self.logger.debug(f"Collecting metrics: {', '.join(self.config.metrics)}")

        results = await self.dispatcher.run_all(self.config.metrics)
        for result in results:
            if result.error:
                self.logger.warning(f"{result.domain} collector stopped early: {result.error}")

        namespace = metric_namespace(self.hostname)
        metric_count = print_metrics(self.context.sink, namespace, self.context.timestamp, self.stdout)
        if metric_count == 0:
            print("Error: No metrics found", file=self.stdout)
            return EXIT_WARNING

        return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='pgmetrics',
        description='PostgreSQL check and metrics',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Every option can also be set through its environment variable
(Check, Critical, Warning, DEBUG, DATABASE_NAME, USER_NAME, METRICS,
PSQL_PATH, QUERY_TIMEOUT) or in a YAML file given with --config.

Metric domains: {', '.join(DOMAINS)}

Examples:
  # Print all metrics for database "app"
  pgmetrics -d app -u monitor

  # Alert when more than 80 connections are open
  pgmetrics -d app -k connections.app.total -w 60 -c 80
        """
    )

    parser.add_argument('-k', '--check', help='Run check for a specific metric')
    parser.add_argument('-c', '--critical', type=float,
                        help='Critical threshold for specific metric check (default: 95)')
    parser.add_argument('-w', '--warning', type=float,
                        help='Warning threshold for specific metric check (default: 85)')
    parser.add_argument('-l', '--debug', action='store_true', default=None,
                        help='Print debug log messages')
    parser.add_argument('-d', '--database', dest='database_name',
                        help='Database to collect metrics (default: sensu)')
    parser.add_argument('-u', '--username', dest='user_name',
                        help='Postgres user to gather metrics (default: sensu)')
    parser.add_argument('-m', '--metrics', action='append',
                        help='Metrics to check, comma separated or repeated (default: all)')
    parser.add_argument('--psql', dest='psql_path', help='psql executable (default: psql)')
    parser.add_argument('--query-timeout', type=float,
                        help='Per-query timeout in seconds, 0 to disable (default: 30)')
    parser.add_argument('--config', help='Optional YAML configuration file')
    parser.add_argument(
        '--log-level',
        default=os.getenv('LOG_LEVEL', 'WARNING'),
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Logging level (default: WARNING or LOG_LEVEL env var)'
    )
    return parser


def _validation_message(error: ValidationError) -> str:
    return "; ".join(
        detail['msg'].removeprefix('Value error, ') for detail in error.errors()
    )


def run(argv: Optional[List[str]] = None, runner: Optional[PsqlRunner] = None,
        stdout: Optional[TextIO] = None) -> int:
    """
    Parse arguments, validate configuration and execute the plugin.

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)
    stdout = stdout or sys.stdout

    overrides = {
        'check': args.check,
        'critical': args.critical,
        'warning': args.warning,
        'debug': args.debug,
        'database_name': args.database_name,
        'user_name': args.user_name,
        'metrics': ','.join(args.metrics) if args.metrics else None,
        'psql_path': args.psql_path,
        'query_timeout': args.query_timeout,
    }

    try:
        config = ConfigLoader.load(args.config, overrides)
    except ValidationError as e:
        print(f"Error: {_validation_message(e)}", file=stdout)
        return EXIT_WARNING
    except (FileNotFoundError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=stdout)
        return EXIT_WARNING

    logger = setup_logger(
        "pgmetrics",
        "DEBUG" if config.debug else args.log_level,
        database_name=config.database_name
    )

    plugin = PostgresPlugin(config, logger, runner=runner, stdout=stdout)
    try:
        return asyncio.run(plugin.execute())
    except ConfigurationError as e:
        print(f"Error: {e}", file=stdout)
        return EXIT_WARNING


def main():
    """CLI entry point."""
    sys.exit(run())


if __name__ == '__main__':
    main()
