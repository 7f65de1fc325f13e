"""JSON logging for plugin runs."""

import logging
import sys
from typing import Optional, TextIO

from pythonjsonlogger import jsonlogger

LOG_FORMAT = '%(asctime)s %(name)s %(levelname)s %(message)s'


def setup_logger(
    name: str = "pgmetrics",
    level: str = "INFO",
    database_name: Optional[str] = None,
    stream: Optional[TextIO] = None
) -> logging.Logger:
    """
    Configure a JSON logger.

    Records go to stderr by default because stdout carries metric lines.
    When a database name is given every record carries it as a
    "database" field, so interleaved runs can be told apart.

    Args:
        name: Logger name
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        database_name: Optional database added to every record
        stream: Output stream, defaults to sys.stderr

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers = []

    static_fields = {"database": database_name} if database_name else {}
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(jsonlogger.JsonFormatter(
        LOG_FORMAT,
        timestamp=True,
        static_fields=static_fields
    ))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
