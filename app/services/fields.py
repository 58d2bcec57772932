from typing import Any, Mapping, Optional


def text(value: Any) -> Optional[str]:
    """Stripped string, or None for blanks and non-strings."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def dig(record: Any, *keys: str) -> Any:
    """Nested lookup that yields None instead of raising on odd shapes."""
    node = record
    for key in keys:
        if not isinstance(node, Mapping):
            return None
        node = node.get(key)
    return node
