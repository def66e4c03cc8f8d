"""Wire encoders for log records."""

from pogrlog.core.encoding.payload import encode_record, format_timestamp, to_payload

__all__ = ["encode_record", "format_timestamp", "to_payload"]
