"""BDD step definitions for remote log delivery features."""

import json
import time
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when
from tests.helpers import TEST_ENDPOINT, FailingTransport, StalledTransport

from pogrlog import (
    AccessKeys,
    DispatchConfig,
    LoggerSettings,
    PogrLogger,
    RecordingTransport,
    Severity,
)


@dataclass
class DeliveryScenarioContext:
    """State shared by the steps of one scenario.

    The logger is created on first use so that Given steps can still swap
    the transport after the Background has run.
    """

    credentials: AccessKeys | None = None
    settings: LoggerSettings | None = None
    threshold: Severity = Severity.INFO
    transport: RecordingTransport = field(default_factory=RecordingTransport)
    call_durations: list[float] = field(default_factory=list)
    exception_raised: Exception | None = None
    _logger: PogrLogger | None = None

    @property
    def logger(self) -> PogrLogger:
        if self._logger is None:
            assert self.credentials is not None and self.settings is not None
            self._logger = PogrLogger.create(
                (self.credentials, self.settings),
                self.threshold,
                endpoint=TEST_ENDPOINT,
                dispatch=DispatchConfig(workers=2),
                transport=self.transport,
            )
        return self._logger

    def log(self, severity: str, message: str, data: dict[str, Any] | None = None) -> None:
        start = time.perf_counter()
        try:
            self.logger.log(Severity.parse(severity), message, data=data)
        except Exception as exc:
            self.exception_raised = exc
        self.call_durations.append(time.perf_counter() - start)

    def settle(self) -> None:
        if not isinstance(self.transport, StalledTransport):
            assert self.logger.dispatcher.wait_idle(timeout=5)

    def close(self) -> None:
        if isinstance(self.transport, StalledTransport):
            self.transport.release()
        if self._logger is not None:
            self._logger.close(timeout=1.0)


@pytest.fixture
def ctx() -> Generator[DeliveryScenarioContext]:
    """Fresh scenario context for each test."""
    context = DeliveryScenarioContext()
    yield context
    context.close()


# === Background Steps ===
@given(
    parsers.parse(
        'a logger for service "{service}" in "{environment}" '
        'with access keys "{access_key}" and "{secret_key}"'
    )
)
def step_logger(
    ctx: DeliveryScenarioContext,
    service: str,
    environment: str,
    access_key: str,
    secret_key: str,
) -> None:
    ctx.credentials = AccessKeys(access_key=access_key, secret_key=secret_key)
    ctx.settings = LoggerSettings(service=service, environment=environment)


@given(parsers.parse('the severity threshold is "{threshold}"'))
def step_threshold(ctx: DeliveryScenarioContext, threshold: str) -> None:
    ctx.threshold = Severity.parse(threshold)


@given("the intake is unreachable")
def step_unreachable(ctx: DeliveryScenarioContext) -> None:
    ctx.transport = FailingTransport()


@given("the intake is stalled")
def step_stalled(ctx: DeliveryScenarioContext) -> None:
    ctx.transport = StalledTransport()


# === Logging Steps ===
@when(parsers.parse('a "{severity}" record "{message}" is logged'))
def step_log(ctx: DeliveryScenarioContext, severity: str, message: str) -> None:
    ctx.log(severity, message)


@when(parsers.parse("a \"{severity}\" record \"{message}\" is logged with data '{data}'"))
def step_log_with_data(
    ctx: DeliveryScenarioContext, severity: str, message: str, data: str
) -> None:
    ctx.log(severity, message, json.loads(data))


@when(parsers.parse('{count:d} "{severity}" records are logged'))
def step_log_many(ctx: DeliveryScenarioContext, count: int, severity: str) -> None:
    for index in range(count):
        ctx.log(severity, f"record {index}")


# === Outcome Steps ===
@then("no request is sent to the intake")
def step_no_request(ctx: DeliveryScenarioContext) -> None:
    ctx.settle()
    assert ctx.transport.requests == []


@then(parsers.parse("exactly {count:d} request is sent to the intake"))
def step_request_count(ctx: DeliveryScenarioContext, count: int) -> None:
    ctx.settle()
    assert len(ctx.transport.requests) == count


@then(parsers.parse('the request body has "{key}" set to "{value}"'))
def step_body_field(ctx: DeliveryScenarioContext, key: str, value: str) -> None:
    assert ctx.transport.payloads()[-1][key] == value


@then(parsers.parse("the request body data is '{data}'"))
def step_body_data(ctx: DeliveryScenarioContext, data: str) -> None:
    assert ctx.transport.payloads()[-1]["data"] == json.loads(data)


@then(parsers.parse('the request carries header "{name}" set to "{value}"'))
def step_header(ctx: DeliveryScenarioContext, name: str, value: str) -> None:
    assert ctx.transport.requests[-1].headers[name] == value


@then("the log call returns normally")
def step_returns_normally(ctx: DeliveryScenarioContext) -> None:
    assert ctx.exception_raised is None


@then(parsers.parse("the dispatcher reports {count:d} failed record"))
def step_failed_count(ctx: DeliveryScenarioContext, count: int) -> None:
    ctx.settle()
    assert ctx.logger.dispatcher.stats().failed == count


@then(parsers.parse("every log call returns within {limit:d} milliseconds"))
def step_call_duration(ctx: DeliveryScenarioContext, limit: int) -> None:
    assert ctx.call_durations
    assert max(ctx.call_durations) < limit / 1000
