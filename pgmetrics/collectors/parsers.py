"""Parsers for psql tuples-only, unaligned output."""

from typing import List, Tuple

from ..utils.errors import ParseShortfallError
from ..utils.metrics import Metric

ROW_DELIMITER = "\n"
FIELD_DELIMITER = "|"


def quote_literal(value: str) -> str:
    """Quote a string as an SQL literal, doubling embedded single quotes."""
    return "'" + value.replace("'", "''") + "'"


def parse_single_value(point: str, text: str) -> List[Metric]:
    """Single query result stored as one metric; empty text becomes "0"."""
    return [Metric(point, text)]


def build_column_query(table: str, where: str, aggregate: str, columns: List[str]) -> str:
    """
    Build a single-row select over a fixed column list.

    Args:
        table: Relation to select from
        where: Filter clause including the WHERE keyword, or ""
        aggregate: Aggregate function wrapped around each column, or ""
        columns: Column names in output order

    Returns:
        str: SQL statement
    """
    if aggregate:
        selected = ", ".join(f"{aggregate}({column})" for column in columns)
    else:
        selected = ", ".join(columns)
    return f"select {selected} from {table} {where};"


def parse_columns(prefix: str, text: str, columns: List[str]) -> List[Metric]:
    """
    Zip one pipe-delimited row with its column names.

    Args:
        prefix: Point prefix, including the trailing dot
        text: Query output
        columns: Expected column names

    Returns:
        List[Metric]: One metric per column

    Raises:
        ParseShortfallError: If the row has fewer fields than columns
    """
    values = text.split(FIELD_DELIMITER)
    if len(values) < len(columns):
        raise ParseShortfallError(len(columns), len(values))
    return [Metric(prefix + column, value) for column, value in zip(columns, values)]


def parse_rows(prefix: str, text: str) -> Tuple[List[Metric], List[str]]:
    """
    Turn key|value rows into metrics named prefix + lower(key).

    Empty output means zero rows.

    Returns:
        Tuple of parsed metrics and the raw rows that had fewer than two fields
    """
    metrics = []
    skipped = []
    if text == "":
        return metrics, skipped

    for row in text.split(ROW_DELIMITER):
        fields = row.split(FIELD_DELIMITER)
        if len(fields) < 2:
            skipped.append(row)
            continue
        metrics.append(Metric(prefix + fields[0].lower(), fields[1]))
    return metrics, skipped
