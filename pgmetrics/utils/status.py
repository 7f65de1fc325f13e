"""Check state enumeration."""

from enum import Enum


class CheckState(Enum):
    """Outcome of a threshold check on a single metric."""

    OK = "ok"
    WARNING = "warning"
    CRITICAL = "critical"
    NOT_FOUND = "not_found"

    def to_exit_code(self) -> int:
        """
        Convert state to a monitoring-plugin exit code.

        Returns:
            int: 0 for OK, 1 for WARNING and NOT_FOUND, 2 for CRITICAL
        """
        return {
            CheckState.OK: 0,
            CheckState.WARNING: 1,
            CheckState.CRITICAL: 2,
            CheckState.NOT_FOUND: 1
        }[self]
