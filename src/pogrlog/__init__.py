"""pogrlog - structured logging client with non-blocking remote delivery."""

from pogrlog.adapters.dispatch import Dispatcher, DispatchStats
from pogrlog.adapters.logging import PogrHandler, install_handler, structured_message
from pogrlog.adapters.transport import HttpxTransport, RecordingTransport, SentRequest
from pogrlog.core.config import (
    DEFAULT_INTAKE_URL,
    INTAKE_URL_ENV,
    DispatchConfig,
    OverflowPolicy,
    parse_config,
    resolve_endpoint,
)
from pogrlog.core.credentials import resolve
from pogrlog.core.errors import (
    AlreadyInitializedError,
    ConfigurationError,
    DeliveryError,
    NotInitializedError,
    PogrLogError,
    SerializationError,
)
from pogrlog.core.levels import admits
from pogrlog.core.models import (
    AccessKeys,
    AuthContext,
    ClientBuild,
    Credentials,
    LoggerSettings,
    LogRecord,
    Severity,
)
from pogrlog.core.records import DEFAULT_EVENT_TYPE, build
from pogrlog.core.state import LoggerState
from pogrlog.logger import (
    PogrLogger,
    debug,
    error,
    get_logger,
    info,
    init_logger,
    is_initialized,
    shutdown,
    structured_log,
    trace,
    warn,
)

__all__ = [
    # Models
    "AccessKeys",
    "AuthContext",
    "ClientBuild",
    "Credentials",
    "LogRecord",
    "LoggerSettings",
    "Severity",
    # Errors
    "AlreadyInitializedError",
    "ConfigurationError",
    "DeliveryError",
    "NotInitializedError",
    "PogrLogError",
    "SerializationError",
    # Configuration
    "DEFAULT_INTAKE_URL",
    "INTAKE_URL_ENV",
    "DispatchConfig",
    "LoggerState",
    "OverflowPolicy",
    "parse_config",
    "resolve_endpoint",
    # Pipeline
    "DEFAULT_EVENT_TYPE",
    "DispatchStats",
    "Dispatcher",
    "admits",
    "build",
    "resolve",
    # Transports
    "HttpxTransport",
    "RecordingTransport",
    "SentRequest",
    # Logging
    "PogrHandler",
    "PogrLogger",
    "debug",
    "error",
    "get_logger",
    "info",
    "init_logger",
    "install_handler",
    "is_initialized",
    "shutdown",
    "structured_log",
    "structured_message",
    "trace",
    "warn",
]
