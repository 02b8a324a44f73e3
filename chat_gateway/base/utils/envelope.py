"""Tolerant accessors for provider JSON envelopes.

Provider responses are nested dict/list structures whose optional parts may be
absent, ``null`` or of an unexpected type. ``dig`` walks such a path and
returns a default instead of raising, which is how adapters read optional
fields such as ``choices[0].message.content``.
"""
from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..models import TokenUsage

PathKey = Union[str, int]


def dig(data: Any, *path: PathKey, default: Any = None) -> Any:
    """Return the value at ``path`` inside ``data`` or ``default``.

    String keys index mappings; integer keys index lists. Any missing step,
    ``None`` value or type mismatch yields ``default``.
    """
    cur = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, list) or not -len(cur) <= key < len(cur):
                return default
            cur = cur[key]
        else:
            if not isinstance(cur, Mapping):
                return default
            cur = cur.get(key)
        if cur is None:
            return default
    return cur


def dig_text(data: Any, *path: PathKey, default: str = "") -> str:
    """Like :func:`dig` but only accepts a string; anything else yields ``default``."""
    value = dig(data, *path)
    return value if isinstance(value, str) else default


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def usage_from(
    data: Any,
    prompt_key: str,
    completion_key: str,
    total_key: str,
) -> Optional[TokenUsage]:
    """Build :class:`TokenUsage` from a provider usage object.

    Returns ``None`` when ``data`` is not a mapping (usage absent). Missing
    counters default to ``0``.
    """
    if not isinstance(data, Mapping):
        return None
    return TokenUsage(
        prompt_tokens=_as_int(data.get(prompt_key)),
        completion_tokens=_as_int(data.get(completion_key)),
        total_tokens=_as_int(data.get(total_key)),
    )


__all__ = ["dig", "dig_text", "usage_from"]
