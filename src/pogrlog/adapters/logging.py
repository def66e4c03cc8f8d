"""Python logging handler adapter for pogrlog.

This adapter bridges Python's standard library logging module to a
PogrLogger, so existing ``logging`` calls are shipped to the intake.
"""

import json
import logging
import traceback
from collections.abc import Mapping
from typing import Any

from pogrlog.core.levels import from_logging_level, to_logging_level
from pogrlog.logger import PogrLogger, get_logger

# Diagnostics from these loggers must never be fed back into the pipeline
_OWN_NAMESPACE = "pogrlog"


def structured_message(
    message: str,
    event_type: str | None = None,
    data: Mapping[str, Any] | None = None,
    tags: Mapping[str, str] | None = None,
) -> str:
    """Encode structured fields as a log message string.

    PogrHandler unpacks messages in this shape, so structured data can
    travel through plain ``logging`` calls:

        logging.info(structured_message("User logged in", "login", {"user_id": 123}))
    """
    return json.dumps(
        {
            "log": message,
            "type": event_type,
            "data": dict(data or {}),
            "tags": dict(tags or {}),
        },
        default=str,
    )


def _unpack_message(
    message: str,
) -> tuple[str, str | None, dict[str, Any], dict[str, str]] | None:
    """Return the fields of a JSON object message, or None.

    The "log", "type", "data" and "tags" keys written by structured_message()
    map onto the record. Any other keys are merged into data. Without a
    "log" key the original text is kept as the message.
    """
    if not message.startswith("{"):
        return None
    try:
        parsed = json.loads(message)
    except json.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    text = parsed.pop("log", message)
    event_type = parsed.pop("type", None)
    tags = parsed.pop("tags", None)
    data = parsed.pop("data", None)
    data = {**parsed, **data} if isinstance(data, dict) else parsed
    return (
        str(text),
        event_type if isinstance(event_type, str) else None,
        data,
        {str(k): str(v) for k, v in tags.items()} if isinstance(tags, dict) else {},
    )


class PogrHandler(logging.Handler):
    """Logging handler that forwards log records to a PogrLogger.

    Structured fields are read from ``extra={"event_type", "data", "tags"}``
    or from a message built with structured_message(). Records emitted by
    pogrlog's own loggers are ignored.

    Example:
        ```python
        import logging
        from pogrlog import PogrHandler, init_logger

        init_logger(config, threshold="info")
        logging.getLogger().addHandler(PogrHandler())
        logging.warning("low disk", extra={"data": {"free_mb": 120}})
        ```
    """

    def __init__(self, target: PogrLogger | None = None, level: int = logging.NOTSET) -> None:
        """Initialize the handler.

        Args:
            target: Logger to forward to. Defaults to the process-wide logger,
                looked up on every record.
            level: Handler level; records below it are not forwarded.
        """
        super().__init__(level)
        self._target = target

    def emit(self, record: logging.LogRecord) -> None:
        """Forward a log record to the PogrLogger.

        Args:
            record: The log record to emit.
        """
        if record.name == _OWN_NAMESPACE or record.name.startswith(_OWN_NAMESPACE + "."):
            return
        try:
            target = self._target or get_logger()
            severity = from_logging_level(record.levelno)
            if not target.enabled(severity):
                return

            message = record.getMessage()
            event_type = getattr(record, "event_type", None)
            data: dict[str, Any] = {}
            tags: dict[str, str] = {}

            unpacked = _unpack_message(message)
            if unpacked is not None:
                message, packed_type, packed_data, packed_tags = unpacked
                event_type = event_type or packed_type
                data.update(packed_data)
                tags.update(packed_tags)

            extra_data = getattr(record, "data", None)
            if isinstance(extra_data, Mapping):
                data.update(extra_data)
            extra_tags = getattr(record, "tags", None)
            if isinstance(extra_tags, Mapping):
                tags.update({str(k): str(v) for k, v in extra_tags.items()})

            # Extract exception info if present
            if record.exc_info:
                exc_type, exc_value, exc_tb = record.exc_info
                if exc_type is not None:
                    data["exc_type"] = exc_type.__name__
                if exc_value is not None:
                    data["exc_message"] = str(exc_value)
                if exc_tb is not None:
                    data["exc_traceback"] = "".join(
                        traceback.format_exception(exc_type, exc_value, exc_tb)
                    )

            target.log(
                severity,
                message,
                event_type=event_type if isinstance(event_type, str) else None,
                data=data,
                tags=tags,
            )
        except Exception:
            self.handleError(record)


def install_handler(
    logger: logging.Logger | str | None = None,
    target: PogrLogger | None = None,
) -> PogrHandler:
    """Attach a PogrHandler to a stdlib logger.

    Args:
        logger: Logger or logger name. Defaults to the root logger.
        target: PogrLogger to forward to. When given, the handler level is
            set from its threshold. Defaults to the process-wide logger.

    Returns:
        The installed handler.
    """
    if not isinstance(logger, logging.Logger):
        logger = logging.getLogger(logger)
    handler = PogrHandler(target)
    if target is not None:
        handler.setLevel(to_logging_level(target.state.threshold))
    logger.addHandler(handler)
    return handler
