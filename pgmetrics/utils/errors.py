"""Exceptions raised by the metrics core."""


class ConfigurationError(ValueError):
    """Invalid configuration detected before any query is executed."""


class ParseShortfallError(ValueError):
    """Query output had fewer delimited fields than expected columns."""

    def __init__(self, expected: int, received: int):
        self.expected = expected
        self.received = received
        super().__init__(f"expected {expected} fields, got {received}")
