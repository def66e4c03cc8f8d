"""Configuration parsing for logger initialization and dispatch tuning."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pogrlog.core.errors import ConfigurationError
from pogrlog.core.models import AccessKeys, ClientBuild, Credentials, LoggerSettings

DEFAULT_INTAKE_URL = "https://api.pogr.io/v1/intake/logs"
INTAKE_URL_ENV = "POGR_INTAKE_URL"

# Fields accepted for each initialization mode
_MODE_FIELDS = {
    "client_build": ("client_id", "build_id"),
    "access_keys": ("access_key", "secret_key"),
}
_SETTINGS_FIELDS = ("service", "environment", "default_type")


class OverflowPolicy(Enum):
    """What the dispatcher does with a new record when its queue is full."""

    DROP_NEWEST = "drop_newest"
    DROP_OLDEST = "drop_oldest"
    GROW = "grow"


@dataclass(frozen=True)
class DispatchConfig:
    """Tuning for the background dispatcher.

    Attributes:
        workers: Number of sender threads.
        max_queue_size: Records held while all workers are busy. Ignored
            by OverflowPolicy.GROW.
        overflow: Behaviour when the queue is full.
        timeout: Per-request HTTP timeout in seconds.
    """

    workers: int = 4
    max_queue_size: int = 1024
    overflow: OverflowPolicy = OverflowPolicy.DROP_NEWEST
    timeout: float = 5.0

    def __post_init__(self) -> None:
        for name in ("workers", "max_queue_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int | float):
            raise ConfigurationError(f"timeout must be a number, got {self.timeout!r}")
        if self.workers < 1:
            raise ConfigurationError("workers must be at least 1")
        if self.max_queue_size < 1:
            raise ConfigurationError("max_queue_size must be at least 1")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if not isinstance(self.overflow, OverflowPolicy):
            try:
                object.__setattr__(self, "overflow", OverflowPolicy(self.overflow))
            except ValueError as exc:
                raise ConfigurationError(
                    f"unknown overflow policy: {self.overflow!r}"
                ) from exc


def resolve_endpoint(
    explicit: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Resolve the intake URL.

    Args:
        explicit: URL passed by the caller; wins when non-blank.
        environ: Environment to read POGR_INTAKE_URL from. Defaults to os.environ.

    Returns:
        The explicit URL, else the environment override, else the default.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    env = os.environ if environ is None else environ
    override = env.get(INTAKE_URL_ENV, "").strip()
    return override or DEFAULT_INTAKE_URL


def _field(config: Mapping[str, Any], name: str) -> str:
    value = config.get(name)
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} must be a non-empty string")
    return value


def parse_config(config: Mapping[str, Any]) -> tuple[Credentials, LoggerSettings]:
    """Parse the tagged initialization mapping.

    Accepted shapes:
        {"mode": "client_build", "client_id", "build_id", "service",
         "environment", "default_type"?}
        {"mode": "access_keys", "access_key", "secret_key", "service",
         "environment", "default_type"?}

    Returns:
        The credentials of the selected mode and the logger settings.

    Raises:
        ConfigurationError: On an unknown mode, a missing or empty field, or
            a field belonging to another mode.
    """
    mode = config.get("mode")
    if mode not in _MODE_FIELDS:
        raise ConfigurationError(
            f"mode must be one of {sorted(_MODE_FIELDS)}, got {mode!r}"
        )

    allowed = {"mode", *_MODE_FIELDS[mode], *_SETTINGS_FIELDS}
    unexpected = sorted(set(config) - allowed)
    if unexpected:
        raise ConfigurationError(
            f"unexpected fields for mode {mode!r}: {', '.join(unexpected)}"
        )

    first, second = (_field(config, name) for name in _MODE_FIELDS[mode])
    credentials: Credentials
    if mode == "client_build":
        credentials = ClientBuild(client_id=first, build_id=second)
    else:
        credentials = AccessKeys(access_key=first, secret_key=second)

    default_type = config.get("default_type")
    if default_type is not None and not isinstance(default_type, str):
        raise ConfigurationError("default_type must be a string")

    settings = LoggerSettings(
        service=_field(config, "service"),
        environment=_field(config, "environment"),
        default_type=default_type or None,
    )
    return credentials, settings
