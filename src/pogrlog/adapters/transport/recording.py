"""In-memory transport that records requests instead of sending them."""

import json
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SentRequest:
    """A request captured by RecordingTransport."""

    url: str
    body: bytes
    headers: dict[str, str] = field(default_factory=dict)

    def json(self) -> Any:
        """Decode the request body."""
        return json.loads(self.body)


class RecordingTransport:
    """In-memory implementation of TransportPort.

    Stores every request and answers with a fixed status. Suitable for
    testing and for running without network access.

    Args:
        status: HTTP status returned for every request.
    """

    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.closed = False
        self._requests: list[SentRequest] = []
        self._lock = threading.Lock()

    def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> int:
        """Record the request and return the configured status."""
        with self._lock:
            self._requests.append(SentRequest(url=url, body=body, headers=dict(headers)))
        return self.status

    def close(self) -> None:
        """Mark the transport closed."""
        self.closed = True

    @property
    def requests(self) -> list[SentRequest]:
        """Snapshot of captured requests in arrival order."""
        with self._lock:
            return list(self._requests)

    def payloads(self) -> list[Any]:
        """Decoded JSON bodies of captured requests."""
        return [request.json() for request in self.requests]
