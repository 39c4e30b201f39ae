"""Validation of the session signing key loaded through :mod:`proconnect.config`."""
from __future__ import annotations

from typing import Final

from pydantic import SecretStr

__all__ = ["MIN_SIGNING_KEY_LENGTH", "MissingSecretError", "is_placeholder", "signing_key"]

MIN_SIGNING_KEY_LENGTH: Final[int] = 16


class MissingSecretError(RuntimeError):
    """Raised when the signing key is absent, a placeholder, or too short."""


_PLACEHOLDER_VALUES: Final[frozenset[str]] = frozenset(
    {
        "changeme",
        "change-me",
        "secret",
        "jwt-secret",
        "placeholder",
        "your-secret-here",
        "replace-with-a-long-random-string",
    }
)


def is_placeholder(value: str | None) -> bool:
    if value is None:
        return True
    candidate = value.strip().lower()
    return candidate == "" or candidate in _PLACEHOLDER_VALUES


def signing_key(value: SecretStr | str | None, *, name: str = "JWT_SECRET_KEY") -> str:
    """Return the usable key held in ``value``.

    The error message names the setting but never echoes its value.
    """

    raw = value.get_secret_value() if isinstance(value, SecretStr) else value
    if is_placeholder(raw):
        raise MissingSecretError(f"{name} must be set to a real secret before issuing session tokens")
    key = raw.strip()
    if len(key) < MIN_SIGNING_KEY_LENGTH:
        raise MissingSecretError(f"{name} must be at least {MIN_SIGNING_KEY_LENGTH} characters long")
    return key
