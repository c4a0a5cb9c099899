"""Map a declarative schema onto environment variables.

Resolves every leaf of a nested schema against an environment mapping,
collects missing values instead of failing on the first one, and renders a
sanitized view of the result in which secret values never appear.
"""

import logging

from ._environment import Environment, ambient_environment
from ._redactor import redact, render_sanitized
from ._resolver import Resolution, resolve
from ._schema import EnvKey, Insert, Nested, Secret, Transform, insert, parse_schema, secret
from ._types import (
    REDACTION_MARKER,
    ConfigError,
    MissingConfigurationError,
    MissingEnvironmentValueError,
    SchemaError,
    TransformError,
)
from ._verify import ResolvedConfig, VerifyResult, strict_verify, verify
from ._version import __version__

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Core
    "verify",
    "strict_verify",
    "VerifyResult",
    "ResolvedConfig",
    # Schema
    "insert",
    "secret",
    "parse_schema",
    "EnvKey",
    "Transform",
    "Insert",
    "Secret",
    "Nested",
    # Building blocks
    "resolve",
    "Resolution",
    "redact",
    "render_sanitized",
    "REDACTION_MARKER",
    "Environment",
    "ambient_environment",
    # Errors
    "ConfigError",
    "SchemaError",
    "MissingEnvironmentValueError",
    "MissingConfigurationError",
    "TransformError",
]
