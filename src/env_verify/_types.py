"""Foundation types for env_verify.

Provides the exception hierarchy and the redaction marker.
"""

from __future__ import annotations

REDACTION_MARKER = "[secret]"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Base exception for config-related errors."""


class SchemaError(ConfigError):
    """Raised when a schema node has an unsupported shape."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        location = path or "<root>"
        super().__init__(f"Invalid schema at {location}: {reason}")


class MissingEnvironmentValueError(ConfigError):
    """An environment variable named by the schema is absent or empty.

    Collected by the resolver rather than raised.
    """

    def __init__(self, env_key: str, path: str) -> None:
        self.env_key = env_key
        self.path = path
        super().__init__(
            f"environment value {env_key} is missing from config object at {path}"
        )

    @property
    def message(self) -> str:
        return str(self)


class MissingConfigurationError(ConfigError):
    """Raised by ``strict_verify`` when one or more values are missing."""

    def __init__(self, messages: list[str]) -> None:
        self.messages = list(messages)
        super().__init__("Missing configuration values: " + "\n".join(self.messages))


class TransformError(ConfigError):
    """Raised when a transform function fails on a present value."""

    def __init__(self, env_key: str, path: str, cause: Exception) -> None:
        self.env_key = env_key
        self.path = path
        super().__init__(
            f"transform for environment value {env_key} failed at {path}: {cause}"
        )
