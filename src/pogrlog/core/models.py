"""Core domain models for structured log delivery."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Any

from pogrlog.core.errors import ConfigurationError

_EMPTY: Mapping[str, Any] = MappingProxyType({})

def _detach(value: Any) -> Any:
    """Copy nested mappings, lists and tuples so no container is shared.

    Leaves are kept as-is. Works without recursion so arbitrarily deep input
    cannot exhaust the stack; cycles are reproduced in the copy and rejected
    later by the encoder.
    """
    memo: dict[int, Any] = {}
    pending: list[tuple[Any, Any]] = []

    def copy_of(item: Any) -> Any:
        if not isinstance(item, Mapping | list | tuple):
            return item
        found = memo.get(id(item))
        if found is None:
            found = {} if isinstance(item, Mapping) else []
            memo[id(item)] = found
            pending.append((item, found))
        return found

    root = copy_of(value)
    while pending:
        source, target = pending.pop()
        if isinstance(source, Mapping):
            for key, item in source.items():
                target[key] = copy_of(item)
        else:
            target.extend(copy_of(item) for item in source)
    return root


_SEVERITY_ALIASES = {
    "warning": "WARN",
    "critical": "ERROR",
    "fatal": "ERROR",
}


class Severity(IntEnum):
    """Log severity, ordered so that a higher value means higher priority.

    ERROR is the most restrictive threshold and TRACE the least.
    """

    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARN = 4
    ERROR = 5

    @property
    def label(self) -> str:
        """Wire spelling of the severity (e.g. "Warn")."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "Severity | str | int") -> "Severity":
        """Coerce a name, label, alias or stdlib logging level to a Severity.

        Args:
            value: A Severity, a case-insensitive name such as "warn" or
                "Warning", or a stdlib logging level number (e.g. 30).

        Returns:
            The matching Severity.

        Raises:
            ConfigurationError: If the value names no known severity.
        """
        if isinstance(value, Severity):
            return value
        if isinstance(value, bool):
            raise ConfigurationError(f"invalid severity: {value!r}")
        if isinstance(value, int):
            from pogrlog.core.levels import from_logging_level

            return from_logging_level(value)
        if isinstance(value, str):
            key = value.strip().lower()
            name = _SEVERITY_ALIASES.get(key, key.upper())
            if name in cls.__members__:
                return cls[name]
        raise ConfigurationError(f"invalid severity: {value!r}")

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class LoggerSettings:
    """Process-wide settings copied onto every record.

    Attributes:
        service: Identifier of the emitting service.
        environment: Deployment environment (e.g. "production").
        default_type: Event type used when a log call names none.
    """

    service: str
    environment: str
    default_type: str | None = None


@dataclass(frozen=True)
class ClientBuild:
    """Client/build credential pair."""

    client_id: str
    build_id: str


@dataclass(frozen=True)
class AccessKeys:
    """Access/secret key credential pair."""

    access_key: str
    secret_key: str

    def __repr__(self) -> str:
        return f"AccessKeys(access_key={self.access_key!r}, secret_key='***')"


Credentials = ClientBuild | AccessKeys


@dataclass(frozen=True)
class AuthContext:
    """Headers that authorize a transmission to the intake endpoint."""

    headers: Mapping[str, str] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


@dataclass(frozen=True)
class LogRecord:
    """A single structured log event, immutable once built.

    Attributes:
        timestamp: Unix timestamp in seconds.
        severity: Severity of the event.
        message: Free-text log message.
        event_type: Category of the event (e.g. "login").
        data: Structured, JSON-representable payload.
        tags: String tags for filtering on the intake side.
        service: Service name copied from LoggerSettings.
        environment: Environment copied from LoggerSettings.
    """

    timestamp: float
    severity: Severity
    message: str
    event_type: str
    service: str
    environment: str
    data: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    tags: Mapping[str, str] = field(default_factory=lambda: _EMPTY)

    def __post_init__(self) -> None:
        # Private copies behind read-only views; callers keep their own dicts.
        object.__setattr__(self, "data", MappingProxyType(_detach(dict(self.data))))
        object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))
