"""Shared test fixtures for all test modules."""

from collections.abc import Callable, Generator
from typing import Any

import pytest
from tests.helpers import TEST_ENDPOINT, FailingTransport, StalledTransport

from pogrlog import (
    AccessKeys,
    ClientBuild,
    DispatchConfig,
    LoggerSettings,
    PogrLogger,
    RecordingTransport,
    Severity,
    shutdown,
)


@pytest.fixture(autouse=True)
def _reset_global_logger() -> Generator[None]:
    """Ensure every test starts and ends without a process-wide logger."""
    shutdown(timeout=1.0)
    yield
    shutdown(timeout=1.0)


@pytest.fixture
def settings() -> LoggerSettings:
    return LoggerSettings(service="svc", environment="prod")


@pytest.fixture
def access_keys() -> AccessKeys:
    return AccessKeys(access_key="ak", secret_key="sk")


@pytest.fixture
def client_build() -> ClientBuild:
    return ClientBuild(client_id="c", build_id="b")


@pytest.fixture
def access_keys_config() -> dict[str, Any]:
    """Tagged initialization mapping for access-key mode."""
    return {
        "mode": "access_keys",
        "access_key": "ak",
        "secret_key": "sk",
        "service": "svc",
        "environment": "prod",
    }


@pytest.fixture
def recording_transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def stalled_transport() -> Generator[StalledTransport]:
    """Transport that hangs until released; released at teardown."""
    transport = StalledTransport()
    yield transport
    transport.release()


@pytest.fixture
def failing_transport() -> FailingTransport:
    return FailingTransport()


@pytest.fixture
def make_logger(
    access_keys: AccessKeys,
    settings: LoggerSettings,
) -> Generator[Callable[..., PogrLogger]]:
    """Factory fixture for PogrLogger instances closed at teardown.

    Usage:
        def test_something(make_logger, recording_transport):
            logger = make_logger(recording_transport, threshold=Severity.DEBUG)
    """
    created: list[PogrLogger] = []

    def _make(
        transport: RecordingTransport,
        threshold: Severity | str = Severity.INFO,
        settings_override: LoggerSettings | None = None,
        dispatch: DispatchConfig | None = None,
    ) -> PogrLogger:
        logger = PogrLogger.create(
            (access_keys, settings_override or settings),
            threshold,
            endpoint=TEST_ENDPOINT,
            dispatch=dispatch or DispatchConfig(workers=2),
            transport=transport,
        )
        created.append(logger)
        return logger

    yield _make
    for logger in created:
        logger.close(timeout=1.0)
