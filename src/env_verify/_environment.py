"""Environment sources for resolution."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Optional

Environment = Mapping[str, Optional[str]]


def ambient_environment() -> dict[str, str]:
    """Return a snapshot of ``os.environ`` taken at call time."""
    return dict(os.environ)


def lookup(env: Environment, key: str) -> str | None:
    """Return the value of *key*, or ``None`` if it is absent or empty."""
    value = env.get(key)
    if value is None or len(value) == 0:
        return None
    return value
