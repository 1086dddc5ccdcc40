"""Ping utility used by the API health-check."""

from importlib.metadata import PackageNotFoundError, version

SERVICE_NAME = "bond-ledger"


def get_ping_message() -> str:
    """Return a static ping message."""
    return "pong"


def get_service_version() -> str:
    """Installed distribution version, or "unknown" when running from a bare checkout."""
    try:
        return version(SERVICE_NAME)
    except PackageNotFoundError:
        return "unknown"
