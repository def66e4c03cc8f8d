"""Resolved, read-only logger state."""

from collections.abc import Mapping
from dataclasses import dataclass

from pogrlog.core.config import resolve_endpoint
from pogrlog.core.credentials import resolve
from pogrlog.core.errors import ConfigurationError
from pogrlog.core.models import AuthContext, Credentials, LoggerSettings, Severity


@dataclass(frozen=True)
class LoggerState:
    """Everything a log call needs after initialization.

    Built once by create(); never mutated afterwards, so it can be read
    from any thread without locking.

    Attributes:
        settings: Service, environment and default event type.
        auth: Resolved credential headers.
        endpoint: Intake URL.
        threshold: Minimum severity that is sent.
    """

    settings: LoggerSettings
    auth: AuthContext
    endpoint: str
    threshold: Severity

    @classmethod
    def create(
        cls,
        credentials: Credentials,
        settings: LoggerSettings,
        threshold: Severity | str | int = Severity.INFO,
        endpoint: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "LoggerState":
        """Validate settings, resolve credentials and the endpoint.

        Raises:
            ConfigurationError: If credentials or settings are incomplete.
        """
        for name in ("service", "environment"):
            value = getattr(settings, name)
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"{name} must be a non-empty string")
        return cls(
            settings=settings,
            auth=resolve(credentials),
            endpoint=resolve_endpoint(endpoint, environ),
            threshold=Severity.parse(threshold),
        )
