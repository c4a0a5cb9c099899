"""Resolve a schema against an environment.

Resolution walks the schema in declared key order and never raises for
missing values: each absent or empty variable becomes an entry in
``Resolution.errors`` and its key resolves to ``None``. Secret markers are
unwrapped and their dotted paths collected in ``Resolution.secret_paths``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ._environment import Environment, lookup
from ._schema import EnvKey, Insert, Nested, Secret, Transform, parse_schema
from ._types import MissingEnvironmentValueError, TransformError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Output of ``resolve``.

    Attributes:
        config: Resolved values, one key per schema key at every depth.
        errors: Missing-value errors in traversal order.
        secret_paths: Dotted paths of every ``Secret`` node in traversal order.
    """

    config: dict[str, Any] = field(default_factory=dict)
    errors: list[MissingEnvironmentValueError] = field(default_factory=list)
    secret_paths: list[str] = field(default_factory=list)


def _read(
    env: Environment,
    env_key: str,
    path: str,
    errors: list[MissingEnvironmentValueError],
) -> str | None:
    value = lookup(env, env_key)
    if value is None:
        logger.debug("Environment value %s missing at %s", env_key, path)
        errors.append(MissingEnvironmentValueError(env_key, path))
    return value


def _resolve_nested(node: Nested, env: Environment, path: str) -> Resolution:
    config: dict[str, Any] = {}
    errors: list[MissingEnvironmentValueError] = []
    secret_paths: list[str] = []

    for key, child in node.children.items():
        sub_path = key if not path else f"{path}.{key}"

        if isinstance(child, Secret):
            secret_paths.append(sub_path)
            child = child.node

        if isinstance(child, Insert):
            value: Any = child.value
        elif isinstance(child, Transform):
            raw = _read(env, child.env_key, sub_path, errors)
            value = None
            if raw is not None:
                try:
                    value = child.func(raw)
                except Exception as exc:
                    raise TransformError(child.env_key, sub_path, exc) from exc
        elif isinstance(child, EnvKey):
            value = _read(env, child.name, sub_path, errors)
        else:
            sub = _resolve_nested(child, env, sub_path)
            value = sub.config
            errors.extend(sub.errors)
            secret_paths.extend(sub.secret_paths)

        config[key] = value

    return Resolution(config=config, errors=errors, secret_paths=secret_paths)


def resolve(
    schema: Nested | Mapping[str, Any],
    env: Environment,
    path: str = "",
) -> Resolution:
    """Resolve *schema* against *env*.

    Parameters
    ----------
    schema:
        A ``Nested`` node or a shorthand mapping (normalized with
        ``parse_schema``; malformed shapes raise ``SchemaError``).
    env:
        Mapping of variable name to value. Absent, ``None`` and ``""`` are
        all treated as missing.
    path:
        Dotted path of *schema* relative to the root, used as the prefix of
        every error and secret path.
    """
    return _resolve_nested(parse_schema(schema), env, path)
