"""ProConnect: professional networking and connection-gated messaging API."""

__version__ = "0.1.0"
