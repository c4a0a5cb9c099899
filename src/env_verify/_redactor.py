"""Build a sanitized view of a resolved config.

Secret paths are dotted paths relative to the config being redacted. A path
without ``.`` names a key at the current level; a longer path is split on its
first ``.`` and handled by recursing into the child named by the head.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic_core import to_json

from ._types import REDACTION_MARKER


def _copy_tree(value: Any) -> Any:
    """Copy dicts and lists recursively; other values are kept as-is."""
    if isinstance(value, Mapping):
        return {key: _copy_tree(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_copy_tree(item) for item in value]
    return value


def _group_by_head(paths: Sequence[str]) -> dict[str, list[str]]:
    groups: dict[str, list[str]] = {}
    for path in paths:
        head, _, rest = path.partition(".")
        groups.setdefault(head, []).append(rest)
    return groups


def redact(secret_paths: Sequence[str], config: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *config* with every value at a secret path redacted.

    The input is never mutated. Redacting the result again with the same
    paths returns an equal tree.
    """
    here = [path for path in secret_paths if "." not in path]
    deeper = [path for path in secret_paths if "." in path]

    result = _copy_tree(config)

    for key in here:
        if key in result:
            result[key] = REDACTION_MARKER

    for head, suffixes in _group_by_head(deeper).items():
        if head in here:
            continue
        child = config.get(head)
        if isinstance(child, Mapping):
            result[head] = redact(suffixes, child)

    return result


def render_sanitized(secret_paths: Sequence[str], config: Mapping[str, Any]) -> str:
    """Render the redacted *config* as JSON with a two-space indent."""
    sanitized = redact(secret_paths, config)
    return to_json(sanitized, indent=2, bytes_mode="base64", fallback=str).decode("utf-8")
