"""Core domain: models, credentials, level filter, record builder, state."""

from pogrlog.core.models import (
    AccessKeys,
    AuthContext,
    ClientBuild,
    Credentials,
    LoggerSettings,
    LogRecord,
    Severity,
)

__all__ = [
    "AccessKeys",
    "AuthContext",
    "ClientBuild",
    "Credentials",
    "LogRecord",
    "LoggerSettings",
    "Severity",
]
