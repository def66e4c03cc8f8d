"""Port interfaces for transport adapters.

The dispatcher depends only on this protocol, not on a concrete HTTP client.
"""

from collections.abc import Mapping
from typing import Protocol, runtime_checkable


@runtime_checkable
class TransportPort(Protocol):
    """Port for posting encoded records to the intake endpoint.

    Adapters implementing this protocol are shared by all dispatcher workers
    and must be safe to call from several threads at once.
    Examples: HttpxTransport, RecordingTransport.
    """

    def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> int:
        """POST body to url and return the HTTP status code.

        Raises on connection failures and timeouts.
        """
        ...

    def close(self) -> None:
        """Release any connections held by the transport."""
        ...
