"""Empty-value pruning applied to documents before emit and after parse."""

from typing import Any


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, list):
        return len(value) == 0
    return False


def prune_empty(value: Any) -> Any:
    """Return a copy of *value* without empty strings, empty lists or ``None``.

    Only mapping entries are dropped.  List elements are pruned recursively but
    never removed, so positional data such as ``[key, value]`` pairs keeps its
    shape.  Empty mappings are kept.
    """
    if isinstance(value, dict):
        pruned = {}
        for key, item in value.items():
            cleaned = prune_empty(item)
            if _is_empty(cleaned):
                continue
            pruned[key] = cleaned
        return pruned
    if isinstance(value, list):
        return [prune_empty(item) for item in value]
    return value


def drop_none(value: Any) -> Any:
    """Return a copy of *value* with ``None`` mapping entries removed.

    Used on parse results, where empty strings and lists are meaningful form
    defaults and must survive.
    """
    if isinstance(value, dict):
        return {key: drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [drop_none(item) for item in value]
    return value
