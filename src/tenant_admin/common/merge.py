"""Deep merge of partial config documents."""

from collections.abc import Mapping
from typing import Any

# Keys that are never merged into a document
RESERVED_KEYS: frozenset[str] = frozenset({"__proto__", "constructor", "prototype"})


def deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> dict[str, Any]:
    """Return a new document with ``patch`` merged onto ``base``.

    Where both sides hold a mapping the merge recurses; any other patch value
    (lists included) replaces the base value whole. Reserved keys in the patch
    are dropped. Neither input is mutated and keys the patch does not touch
    keep the base's values.
    """
    result = dict(base)
    for key, value in patch.items():
        if key in RESERVED_KEYS:
            continue
        current = result.get(key)
        if isinstance(value, Mapping) and isinstance(current, Mapping):
            result[key] = deep_merge(current, value)
        elif isinstance(value, Mapping):
            result[key] = deep_merge({}, value)
        else:
            result[key] = value
    return result
