"""Security helpers (signing key validation)."""
from .secrets import MIN_SIGNING_KEY_LENGTH, MissingSecretError, is_placeholder, signing_key

__all__ = ["MIN_SIGNING_KEY_LENGTH", "MissingSecretError", "is_placeholder", "signing_key"]
