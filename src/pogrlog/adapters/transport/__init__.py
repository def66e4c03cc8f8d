"""Transport adapters implementing TransportPort."""

from pogrlog.adapters.transport.httpx_transport import HttpxTransport
from pogrlog.adapters.transport.recording import RecordingTransport, SentRequest

__all__ = [
    "HttpxTransport",
    "RecordingTransport",
    "SentRequest",
]
