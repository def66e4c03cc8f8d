"""Credential resolution into intake request headers."""

from pogrlog.core.errors import ConfigurationError
from pogrlog.core.models import AccessKeys, AuthContext, ClientBuild, Credentials

CLIENT_HEADER = "POGR_CLIENT"
BUILD_HEADER = "POGR_BUILD"
ACCESS_HEADER = "POGR_ACCESS"
SECRET_HEADER = "POGR_SECRET"


def _require(value: object, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ConfigurationError(f"{name} must be a non-empty string")
    return value


def resolve(credentials: Credentials) -> AuthContext:
    """Resolve credentials into the headers that authorize a transmission.

    Args:
        credentials: Either a ClientBuild or an AccessKeys pair.

    Returns:
        AuthContext carrying exactly the two headers of the active variant.

    Raises:
        ConfigurationError: If a field is empty or the variant is unknown.
    """
    if isinstance(credentials, ClientBuild):
        return AuthContext(
            headers={
                CLIENT_HEADER: _require(credentials.client_id, "client_id"),
                BUILD_HEADER: _require(credentials.build_id, "build_id"),
            }
        )
    if isinstance(credentials, AccessKeys):
        return AuthContext(
            headers={
                ACCESS_HEADER: _require(credentials.access_key, "access_key"),
                SECRET_HEADER: _require(credentials.secret_key, "secret_key"),
            }
        )
    raise ConfigurationError(
        f"credentials must be ClientBuild or AccessKeys, got {type(credentials).__name__}"
    )
