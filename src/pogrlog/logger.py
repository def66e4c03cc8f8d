"""Logger handle and the process-wide logger slot.

PogrLogger is an explicit handle that owns the resolved state and a
dispatcher. Applications normally create one through init_logger(), which
also stores it in a process-wide slot read by the module-level helpers.
"""

import threading
from collections.abc import Mapping
from typing import Any

from pogrlog.adapters.dispatch import Dispatcher
from pogrlog.adapters.transport.httpx_transport import HttpxTransport
from pogrlog.core.config import DispatchConfig, parse_config
from pogrlog.core.errors import (
    AlreadyInitializedError,
    ConfigurationError,
    NotInitializedError,
)
from pogrlog.core.levels import admits
from pogrlog.core.models import AccessKeys, ClientBuild, Credentials, LoggerSettings, Severity
from pogrlog.core.ports import TransportPort
from pogrlog.core.records import build
from pogrlog.core.state import LoggerState

Config = Mapping[str, Any] | tuple[Credentials, LoggerSettings]


def _coerce_config(config: Config) -> tuple[Credentials, LoggerSettings]:
    if isinstance(config, Mapping):
        return parse_config(config)
    if (
        isinstance(config, tuple)
        and len(config) == 2
        and isinstance(config[0], (ClientBuild, AccessKeys))
        and isinstance(config[1], LoggerSettings)
    ):
        return config
    raise ConfigurationError(
        "config must be a mapping or a (credentials, LoggerSettings) pair"
    )


class PogrLogger:
    """Filters, builds and dispatches structured log records.

    Example:
        ```python
        from pogrlog import AccessKeys, LoggerSettings, PogrLogger

        logger = PogrLogger.create(
            (AccessKeys("ak", "sk"), LoggerSettings("svc", "prod")),
            threshold="info",
        )
        logger.warn("low disk", data={"free_mb": 120})
        ```
    """

    def __init__(self, state: LoggerState, dispatcher: Dispatcher) -> None:
        self._state = state
        self._dispatcher = dispatcher

    @classmethod
    def create(
        cls,
        config: Config,
        threshold: Severity | str | int = Severity.INFO,
        *,
        endpoint: str | None = None,
        dispatch: DispatchConfig | None = None,
        transport: TransportPort | None = None,
    ) -> "PogrLogger":
        """Resolve configuration and start a dispatcher.

        Args:
            config: Tagged initialization mapping or a
                (credentials, LoggerSettings) pair.
            threshold: Minimum severity that is sent.
            endpoint: Intake URL; defaults to POGR_INTAKE_URL or the
                built-in URL.
            dispatch: Dispatcher tuning.
            transport: Transport to use instead of HttpxTransport.

        Raises:
            ConfigurationError: If the configuration is incomplete.
        """
        credentials, settings = _coerce_config(config)
        state = LoggerState.create(credentials, settings, threshold, endpoint)
        dispatch = dispatch or DispatchConfig()
        if transport is None:
            transport = HttpxTransport(timeout=dispatch.timeout)
        return cls(state, Dispatcher(transport, dispatch))

    @property
    def state(self) -> LoggerState:
        return self._state

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def enabled(self, severity: Severity) -> bool:
        """Return True if records of this severity pass the threshold."""
        return admits(severity, self._state.threshold)

    def log(
        self,
        severity: Severity | str,
        message: str,
        event_type: str | None = None,
        data: Mapping[str, Any] | None = None,
        tags: Mapping[str, str] | None = None,
    ) -> bool:
        """Send a structured log record in the background.

        Returns as soon as the record is queued; delivery failures are never
        raised here.

        Args:
            severity: Severity of the event.
            message: The log message.
            event_type: Event category; falls back to the configured default.
            data: Structured fields.
            tags: String tags.

        Returns:
            True if the record was handed to the dispatcher, False if it was
            filtered out or dropped.
        """
        if not isinstance(severity, Severity):
            severity = Severity.parse(severity)
        if not admits(severity, self._state.threshold):
            return False
        record = build(
            severity,
            message,
            event_type,
            data,
            tags,
            settings=self._state.settings,
        )
        return self._dispatcher.submit(record, self._state.auth, self._state.endpoint)

    def error(self, message: str, **fields: Any) -> bool:
        """Log at ERROR. Accepts event_type, data and tags keywords."""
        return self.log(Severity.ERROR, message, **fields)

    def warn(self, message: str, **fields: Any) -> bool:
        """Log at WARN. Accepts event_type, data and tags keywords."""
        return self.log(Severity.WARN, message, **fields)

    warning = warn

    def info(self, message: str, **fields: Any) -> bool:
        """Log at INFO. Accepts event_type, data and tags keywords."""
        return self.log(Severity.INFO, message, **fields)

    def debug(self, message: str, **fields: Any) -> bool:
        """Log at DEBUG. Accepts event_type, data and tags keywords."""
        return self.log(Severity.DEBUG, message, **fields)

    def trace(self, message: str, **fields: Any) -> bool:
        """Log at TRACE. Accepts event_type, data and tags keywords."""
        return self.log(Severity.TRACE, message, **fields)

    def close(self, timeout: float | None = None) -> None:
        """Drain pending records within timeout and close the transport."""
        self._dispatcher.close(timeout)


_lock = threading.Lock()
_logger: PogrLogger | None = None


def init_logger(
    config: Config,
    threshold: Severity | str | int = Severity.INFO,
    *,
    endpoint: str | None = None,
    dispatch: DispatchConfig | None = None,
    transport: TransportPort | None = None,
) -> PogrLogger:
    """Create the process-wide logger.

    The logger is published only after it is fully built, so concurrent
    readers see either nothing or a complete logger.

    Raises:
        ConfigurationError: If the configuration is incomplete.
        AlreadyInitializedError: If a logger already exists. The existing
            logger stays in place; call shutdown() first to replace it.
    """
    global _logger
    with _lock:
        if _logger is not None:
            raise AlreadyInitializedError(
                "pogrlog is already initialized; call shutdown() before re-initializing"
            )
        _logger = PogrLogger.create(
            config,
            threshold,
            endpoint=endpoint,
            dispatch=dispatch,
            transport=transport,
        )
        return _logger


def get_logger() -> PogrLogger:
    """Return the process-wide logger.

    Raises:
        NotInitializedError: If init_logger() has not been called.
    """
    logger = _logger
    if logger is None:
        raise NotInitializedError("pogrlog is not initialized; call init_logger() first")
    return logger


def is_initialized() -> bool:
    return _logger is not None


def shutdown(timeout: float | None = None) -> None:
    """Close the process-wide logger and empty the slot.

    Records still in flight after timeout are abandoned.
    """
    global _logger
    with _lock:
        logger, _logger = _logger, None
    if logger is not None:
        logger.close(timeout)


def structured_log(
    severity: Severity | str,
    message: str,
    event_type: str | None = None,
    data: Mapping[str, Any] | None = None,
    tags: Mapping[str, str] | None = None,
) -> bool:
    """Log a structured record through the process-wide logger.

    Example:
        ```python
        structured_log("info", "User logged in", "login", {"user_id": 123}, {"env": "production"})
        ```
    """
    return get_logger().log(severity, message, event_type, data, tags)


def error(message: str, **fields: Any) -> bool:
    """Log at ERROR through the process-wide logger."""
    return get_logger().log(Severity.ERROR, message, **fields)


def warn(message: str, **fields: Any) -> bool:
    """Log at WARN through the process-wide logger."""
    return get_logger().log(Severity.WARN, message, **fields)


def info(message: str, **fields: Any) -> bool:
    """Log at INFO through the process-wide logger."""
    return get_logger().log(Severity.INFO, message, **fields)


def debug(message: str, **fields: Any) -> bool:
    """Log at DEBUG through the process-wide logger."""
    return get_logger().log(Severity.DEBUG, message, **fields)


def trace(message: str, **fields: Any) -> bool:
    """Log at TRACE through the process-wide logger."""
    return get_logger().log(Severity.TRACE, message, **fields)
