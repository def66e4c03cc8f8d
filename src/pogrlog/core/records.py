"""Record builder for LogRecord objects."""

import time
from collections.abc import Callable, Mapping
from typing import Any

from pogrlog.core.models import LoggerSettings, LogRecord, Severity

DEFAULT_EVENT_TYPE = "generic"


def resolve_event_type(event_type: str | None, settings: LoggerSettings) -> str:
    """Pick the explicit event type, else the configured default, else "generic"."""
    if event_type:
        return event_type
    if settings.default_type:
        return settings.default_type
    return DEFAULT_EVENT_TYPE


def build(
    severity: Severity,
    message: str,
    event_type: str | None = None,
    data: Mapping[str, Any] | None = None,
    tags: Mapping[str, str] | None = None,
    *,
    settings: LoggerSettings,
    clock: Callable[[], float] | None = None,
) -> LogRecord:
    """Build a log record with an automatic timestamp.

    Apart from the timestamp the result depends only on the arguments.
    Serializability of data is not checked here; the encoder reports it.

    Args:
        severity: Severity of the event.
        message: The log message.
        event_type: Explicit event type for this call.
        data: Structured fields. Defaults to an empty mapping.
        tags: String tags. Defaults to an empty mapping.
        settings: Process-wide settings supplying service and environment.
        clock: Source of the timestamp. Defaults to time.time.

    Returns:
        An immutable LogRecord.
    """
    return LogRecord(
        timestamp=clock() if clock is not None else time.time(),
        severity=severity,
        message=message,
        event_type=resolve_event_type(event_type, settings),
        service=settings.service,
        environment=settings.environment,
        data=data or {},
        tags=tags or {},
    )
