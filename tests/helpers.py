"""Fake transports shared by unit, integration and feature tests."""

import threading
from collections.abc import Mapping

import httpx

from pogrlog import RecordingTransport

TEST_ENDPOINT = "https://intake.test/v1/intake/logs"


class StalledTransport(RecordingTransport):
    """Transport whose send() blocks until release() is called.

    Simulates an unresponsive intake. Tracks how many sends are waiting at
    once so tests can observe parallel dispatch.
    """

    def __init__(self, status: int = 200) -> None:
        super().__init__(status)
        self._release = threading.Event()
        self._started = threading.Condition()
        self._concurrent = 0
        self.started_count = 0
        self.max_concurrent = 0

    def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> int:
        with self._started:
            self.started_count += 1
            self._concurrent += 1
            self.max_concurrent = max(self.max_concurrent, self._concurrent)
            self._started.notify_all()
        try:
            self._release.wait(timeout=10)
            return super().send(url, body, headers)
        finally:
            with self._started:
                self._concurrent -= 1

    def wait_started(self, count: int = 1, timeout: float = 5.0) -> bool:
        """Wait until at least count sends have begun."""
        with self._started:
            return self._started.wait_for(lambda: self.started_count >= count, timeout)

    def release(self) -> None:
        self._release.set()


class FailingTransport(RecordingTransport):
    """Transport that raises httpx.ConnectError for its first sends.

    Args:
        failures: Number of sends that fail before requests are recorded.
    """

    def __init__(self, failures: int = 1_000_000) -> None:
        super().__init__()
        self._failures = failures
        self._failures_lock = threading.Lock()

    def send(self, url: str, body: bytes, headers: Mapping[str, str]) -> int:
        with self._failures_lock:
            if self._failures > 0:
                self._failures -= 1
                raise httpx.ConnectError("connection refused")
        return super().send(url, body, headers)
