"""
Layered config merging for SkillStack.

Later layers win. A ``+key`` list extends the earlier list, a ``-key`` list
removes entries from it, and a null value deletes the key.
"""

from typing import Any

LIST_APPEND = "+"
LIST_REMOVE = "-"


def _apply_list_op(op: str, current: Any, items: list[Any]) -> list[Any] | None:
    """Combine a list layer into the current value. None means drop the key."""
    if not isinstance(current, list):
        return list(items) if op == LIST_APPEND else None
    if op == LIST_APPEND:
        return current + [item for item in items if item not in current]
    return [item for item in current if item not in items]


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge an override layer onto a base layer without mutating either.

    Examples:
        >>> deep_merge({"search": {"debounce_ms": 200}}, {"search": {"debounce_ms": 300}})
        {'search': {'debounce_ms': 300}}
        >>> deep_merge({"tags": ["react"]}, {"+tags": ["vue"]})
        {'tags': ['react', 'vue']}
    """
    merged = dict(base)

    for key, value in override.items():
        op = key[:1]
        if op in (LIST_APPEND, LIST_REMOVE) and isinstance(value, list):
            target = key[1:]
            combined = _apply_list_op(op, merged.get(target), value)
            if combined is not None:
                merged[target] = combined
            continue

        if value is None:
            merged.pop(key, None)
        elif isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def get_nested_value(config: dict[str, Any], key_path: str) -> Any:
    """Look up a dotted key such as ``search.debounce_ms``; None if absent."""
    node: Any = config
    for part in key_path.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def set_nested_value(config: dict[str, Any], key_path: str, value: Any) -> dict[str, Any]:
    """Set a dotted key in place, creating sections on the way. Returns ``config``."""
    *sections, leaf = key_path.split(".")
    node = config
    for section in sections:
        child = node.get(section)
        if not isinstance(child, dict):
            child = node[section] = {}
        node = child
    node[leaf] = value
    return config
