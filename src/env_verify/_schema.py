"""Schema node types.

A schema is a tree of nodes. Callers usually write it as a plain nested dict
using shorthand leaves::

    schema = {
        "base_url": "BASE_URL",                        # EnvKey
        "port": ("PORT", int),                         # Transform
        "debug": insert(False),                        # Insert
        "db": {                                        # Nested
            "name": "DB_NAME",
            "password": secret("DB_PASSWORD"),         # Secret
        },
    }

``parse_schema`` turns that shorthand into explicit nodes once, so resolution
dispatches on node type instead of sniffing shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Union

from ._types import SchemaError


# ---------------------------------------------------------------------------
# Node variants
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EnvKey:
    """Read ``name`` from the environment as-is."""

    name: str


@dataclass(frozen=True)
class Transform:
    """Read ``env_key`` from the environment and pass it through ``func``."""

    env_key: str
    func: Callable[[str], Any]


@dataclass(frozen=True)
class Insert:
    """Insert ``value`` verbatim without consulting the environment."""

    value: Any


@dataclass(frozen=True)
class Secret:
    """Mark the wrapped node, and everything it resolves to, as sensitive."""

    node: Any


@dataclass(frozen=True)
class Nested:
    """An object node: an ordered mapping of key to child node."""

    children: Mapping[str, Any] = field(default_factory=dict)


SchemaNode = Union[EnvKey, Transform, Insert, Secret, Nested]


# ---------------------------------------------------------------------------
# Construction helpers
# ---------------------------------------------------------------------------


def insert(value: Any) -> Insert:
    """Wrap a literal value so it is inserted verbatim."""
    return Insert(value)


def secret(value: Any) -> Secret:
    """Wrap a schema node so its resolved value is redacted when rendered."""
    return Secret(value)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _join(path: str, key: str) -> str:
    return key if not path else f"{path}.{key}"


def _parse_node(value: Any, path: str, *, inside_secret: bool = False) -> SchemaNode:
    if isinstance(value, Secret):
        if inside_secret:
            raise SchemaError(path, "a secret cannot wrap another secret")
        return Secret(_parse_node(value.node, path, inside_secret=True))

    if isinstance(value, (EnvKey, Insert)):
        return value

    if isinstance(value, Transform):
        if not callable(value.func):
            raise SchemaError(path, "transform function is not callable")
        return value

    if isinstance(value, Nested):
        return _parse_mapping(value.children, path, inside_secret=inside_secret)

    if isinstance(value, str):
        return EnvKey(value)

    if isinstance(value, (list, tuple)):
        if len(value) != 2 or not isinstance(value[0], str) or not callable(value[1]):
            raise SchemaError(
                path,
                "arrays are reserved for (env_key, transform) pairs",
            )
        return Transform(value[0], value[1])

    if isinstance(value, Mapping):
        return _parse_mapping(value, path, inside_secret=inside_secret)

    raise SchemaError(path, f"unsupported node type {type(value).__name__}")


def _parse_mapping(
    raw: Mapping[Any, Any],
    path: str,
    *,
    inside_secret: bool = False,
) -> Nested:
    children: dict[str, SchemaNode] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            raise SchemaError(path, f"key {key!r} is not a string")
        if "." in key:
            raise SchemaError(_join(path, key), "keys must not contain '.'")
        children[key] = _parse_node(value, _join(path, key), inside_secret=inside_secret)
    return Nested(children)


def parse_schema(raw: Mapping[str, Any] | Nested) -> Nested:
    """Normalize a shorthand schema into explicit nodes.

    Raises ``SchemaError`` naming the dotted path of the first node whose
    shape is not supported.
    """
    if isinstance(raw, Nested):
        return _parse_mapping(raw.children, "")
    if not isinstance(raw, Mapping):
        raise SchemaError("", f"schema must be a mapping, got {type(raw).__name__}")
    return _parse_mapping(raw, "")
