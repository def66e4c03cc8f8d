"""Background dispatcher that posts log records without blocking the caller.

Log calls hand records to a bounded in-memory queue and return immediately.
A small pool of daemon worker threads drains the queue, sending one HTTP POST
per record. Delivery is best effort: failures are counted and reported on the
``pogrlog.adapters.dispatch`` logger, never retried and never raised to the caller.
Records still queued when the process exits are lost.
"""

import logging
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import NamedTuple

from pogrlog.core.config import DispatchConfig, OverflowPolicy
from pogrlog.core.encoding.payload import encode_record
from pogrlog.core.errors import DeliveryError
from pogrlog.core.models import AuthContext, LogRecord
from pogrlog.core.ports import TransportPort

logger = logging.getLogger(__name__)


class _Job(NamedTuple):
    record: LogRecord
    auth: AuthContext
    endpoint: str


@dataclass(frozen=True)
class DispatchStats:
    """Snapshot of dispatcher counters.

    Once the dispatcher is idle, submitted == delivered + failed + dropped.

    Attributes:
        submitted: Records passed to submit().
        delivered: Records acknowledged with a 2xx status.
        failed: Records lost to encoding, transport or HTTP errors.
        dropped: Records discarded by the overflow policy or after close().
    """

    submitted: int = 0
    delivered: int = 0
    failed: int = 0
    dropped: int = 0


class Dispatcher:
    """Fire-and-forget sender for log records.

    Records carry no ordering guarantee: with more than one worker, two
    records submitted in order A, B may reach the intake as B, A.

    Args:
        transport: Adapter implementing TransportPort, shared by all workers.
        config: Worker count, queue bound and overflow policy.
    """

    def __init__(
        self,
        transport: TransportPort,
        config: DispatchConfig | None = None,
    ) -> None:
        self._transport = transport
        self._config = config or DispatchConfig()
        self._queue: deque[_Job] = deque()
        self._cond = threading.Condition()
        self._in_flight = 0
        self._closed = False
        self._transport_closed = False
        self._submitted = 0
        self._delivered = 0
        self._failed = 0
        self._dropped = 0
        self._workers = [
            threading.Thread(
                target=self._run,
                name=f"pogrlog-dispatch-{index}",
                daemon=True,
            )
            for index in range(self._config.workers)
        ]
        for worker in self._workers:
            worker.start()

    @property
    def config(self) -> DispatchConfig:
        """Dispatcher configuration."""
        return self._config

    @property
    def closed(self) -> bool:
        """True once close() has been called."""
        return self._closed

    def submit(self, record: LogRecord, auth: AuthContext, endpoint: str) -> bool:
        """Queue a record for delivery without waiting for the network.

        Args:
            record: The record to send.
            auth: Credential headers for the request.
            endpoint: Intake URL.

        Returns:
            True if the record was queued, False if it was dropped because
            the queue was full (DROP_NEWEST) or the dispatcher is closed.
        """
        job = _Job(record, auth, endpoint)
        policy = self._config.overflow
        with self._cond:
            self._submitted += 1
            if self._closed:
                self._dropped += 1
                return False
            if policy is not OverflowPolicy.GROW and len(self._queue) >= self._config.max_queue_size:
                self._dropped += 1
                if policy is OverflowPolicy.DROP_NEWEST:
                    return False
                self._queue.popleft()
            self._queue.append(job)
            self._cond.notify()
        return True

    def stats(self) -> DispatchStats:
        """Return a consistent snapshot of the counters."""
        with self._cond:
            return DispatchStats(
                submitted=self._submitted,
                delivered=self._delivered,
                failed=self._failed,
                dropped=self._dropped,
            )

    def pending(self) -> int:
        """Number of records queued or currently being sent."""
        with self._cond:
            return len(self._queue) + self._in_flight

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until the queue is empty and no send is in flight.

        Intended for tests and orderly shutdown; log calls never wait.

        Returns:
            True if the dispatcher became idle before the timeout.
        """
        with self._cond:
            return self._cond.wait_for(
                lambda: not self._queue and self._in_flight == 0, timeout
            )

    def close(self, timeout: float | None = None) -> None:
        """Stop accepting records, let workers drain the queue and join them.

        Workers still busy when the timeout expires are abandoned; they are
        daemon threads and do not keep the process alive. Safe to call twice.
        """
        with self._cond:
            self._closed = True
            self._cond.notify_all()
        deadline = None if timeout is None else time.monotonic() + timeout
        for worker in self._workers:
            if worker is threading.current_thread():
                continue
            remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
            worker.join(remaining)
        with self._cond:
            if self._transport_closed:
                return
            self._transport_closed = True
        self._transport.close()

    def __enter__(self) -> "Dispatcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _run(self) -> None:
        while True:
            with self._cond:
                while not self._queue and not self._closed:
                    self._cond.wait()
                if not self._queue:
                    return
                job = self._queue.popleft()
                self._in_flight += 1
            delivered = False
            try:
                delivered = self._deliver(job)
            except Exception:
                logger.exception("Unexpected error while dispatching log record")
            finally:
                with self._cond:
                    self._in_flight -= 1
                    if delivered:
                        self._delivered += 1
                    else:
                        self._failed += 1
                    self._cond.notify_all()

    def _deliver(self, job: _Job) -> bool:
        """Send one record. Returns True on a 2xx response."""
        try:
            body = encode_record(job.record)
        except Exception:
            # Encoding failures stay local to this record.
            logger.error("Dropping log record that cannot be encoded", exc_info=True)
            return False

        headers = {**job.auth.headers, "Content-Type": "application/json"}
        try:
            status = self._transport.send(job.endpoint, body, headers)
            if not 200 <= status < 300:
                raise DeliveryError(status)
        except DeliveryError as exc:
            logger.warning("Log record rejected by %s: %s", job.endpoint, exc)
            return False
        except Exception:
            # Any transport failure is contained in the worker.
            logger.warning("Failed to send log record to %s", job.endpoint, exc_info=True)
            return False
        return True
