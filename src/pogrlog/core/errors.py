"""Exception hierarchy for pogrlog.

Only configuration errors ever reach application code. Everything raised
after a record has been handed to the dispatcher stays inside the worker.
"""


class PogrLogError(Exception):
    """Base class for all pogrlog errors."""


class ConfigurationError(PogrLogError, ValueError):
    """Raised when the logger cannot be initialized from its configuration."""


class AlreadyInitializedError(ConfigurationError):
    """Raised by init_logger when the process-wide logger already exists."""


class NotInitializedError(PogrLogError, RuntimeError):
    """Raised when the process-wide logger is used before init_logger."""


class SerializationError(PogrLogError, ValueError):
    """Raised when a log record cannot be encoded to the wire format."""


class DeliveryError(PogrLogError):
    """Raised inside the dispatcher when the intake rejects a record."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"intake responded with HTTP {status_code}")
        self.status_code = status_code
