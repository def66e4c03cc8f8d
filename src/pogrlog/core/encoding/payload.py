"""JSON wire encoder for log records."""

import json
from datetime import UTC, datetime
from typing import Any

from pogrlog.core.errors import SerializationError
from pogrlog.core.models import LogRecord


def format_timestamp(timestamp: float) -> str:
    """Format a Unix timestamp as RFC 3339 UTC with millisecond precision."""
    moment = datetime.fromtimestamp(timestamp, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_payload(record: LogRecord) -> dict[str, Any]:
    """Convert a record to the JSON object posted to the intake.

    Args:
        record: The record to convert.

    Returns:
        Dict with the keys timestamp, severity, message, event_type,
        service, environment, data and tags. data and tags are always
        present, possibly empty.
    """
    return {
        "timestamp": format_timestamp(record.timestamp),
        "severity": record.severity.label,
        "message": record.message,
        "event_type": record.event_type,
        "service": record.service,
        "environment": record.environment,
        "data": dict(record.data),
        "tags": dict(record.tags),
    }


def encode_record(record: LogRecord) -> bytes:
    """Encode a record to a compact UTF-8 JSON body.

    Raises:
        SerializationError: If data or tags hold values JSON cannot represent,
            including NaN, cycles and data
            nested too deeply to encode.
    """
    try:
        text = json.dumps(
            to_payload(record),
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
        )
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(
            f"cannot encode {record.event_type!r} record: {exc}"
        ) from exc
    return text.encode("utf-8")
