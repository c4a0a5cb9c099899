"""Public entry points: ``verify`` and ``strict_verify``.

Lookup source:
1. The ``env`` mapping, if given
2. Otherwise a snapshot of ``os.environ`` taken once per call
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Callable, Iterator

from ._environment import Environment, ambient_environment
from ._redactor import render_sanitized
from ._resolver import resolve
from ._schema import Nested
from ._types import MissingConfigurationError

logger = logging.getLogger(__name__)


class ResolvedConfig(dict):
    """Resolved configuration values.

    When the schema contained secrets, ``render_sanitized`` is a zero-argument
    callable returning the config as JSON with every secret replaced by
    ``"[secret]"``, and ``str()`` / ``repr()`` return that same text. Without
    secrets ``render_sanitized`` is ``None`` and the config prints as a dict.
    """

    def __init__(
        self,
        *args: Any,
        render_sanitized: Callable[[], str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.render_sanitized = render_sanitized

    def __repr__(self) -> str:
        if self.render_sanitized is not None:
            return self.render_sanitized()
        return super().__repr__()

    __str__ = __repr__


@dataclass(frozen=True)
class VerifyResult:
    """Result of ``verify``. Unpacks as ``config, errors``."""

    config: ResolvedConfig
    errors: list[str] = field(default_factory=list)
    secret_paths: list[str] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        yield self.config
        yield self.errors


def verify(
    schema: Nested | Mapping[str, Any],
    env: Environment | None = None,
) -> VerifyResult:
    """Resolve *schema* and report missing values without raising.

    Parameters
    ----------
    schema:
        Shorthand mapping or ``Nested`` node describing the config.
    env:
        Variable source. Defaults to a snapshot of ``os.environ``.
    """
    source = ambient_environment() if env is None else env
    resolution = resolve(schema, source)

    config = ResolvedConfig(resolution.config)
    if resolution.secret_paths:
        config.render_sanitized = partial(
            render_sanitized, list(resolution.secret_paths), config
        )

    errors = [error.message for error in resolution.errors]

    logger.debug(
        "Verified config: %d keys, %d missing, %d secret",
        len(config),
        len(errors),
        len(resolution.secret_paths),
    )
    return VerifyResult(
        config=config,
        errors=errors,
        secret_paths=list(resolution.secret_paths),
    )


def strict_verify(
    schema: Nested | Mapping[str, Any],
    env: Environment | None = None,
) -> ResolvedConfig:
    """Resolve *schema*, raising ``MissingConfigurationError`` if anything is missing."""
    result = verify(schema, env)
    if result.errors:
        logger.warning("Configuration incomplete: %d value(s) missing", len(result.errors))
        raise MissingConfigurationError(result.errors)
    return result.config
