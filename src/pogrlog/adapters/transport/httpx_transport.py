"""HTTP transport adapter backed by httpx."""

from collections.abc import Mapping

import httpx


class HttpxTransport:
    """httpx implementation of TransportPort.

    A single httpx.Client is shared by all dispatcher workers; httpx
    clients are safe to use from several threads.

    Args:
        timeout: Per-request timeout in seconds.
        client: Pre-configured client to use instead of creating one. A
            supplied client is not closed by close().
    """

    def __init__(self, timeout: float = 5.0, client: httpx.Client | None = None) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)

    def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> int:
        """POST body to url and return the response status code.

        Raises:
            httpx.HTTPError: On connection failures and timeouts.
        """
        response = self._client.post(url, content=body, headers=dict(headers))
        return response.status_code

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()
