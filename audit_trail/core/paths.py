"""Dotted-path navigation into nested arguments and results."""

from collections.abc import Mapping
from typing import Any, Optional


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, (list, tuple)) and segment.isascii() and segment.isdigit():
        index = int(segment)
        return current[index] if index < len(current) else None
    if isinstance(current, Mapping):
        return current.get(segment)
    return getattr(current, segment, None)


def get_path(target: Any, path: Optional[str]) -> Any:
    """
    Walk ``path`` ("data.items.0.id") from ``target``.

    A segment made of decimal digits is a list index when the current value is a
    list or tuple; otherwise it is a key (mappings) or attribute (other objects).
    Any missing step yields None instead of raising.
    """
    if target is None or not path:
        return None
    current = target
    for segment in path.split("."):
        if current is None:
            return None
        current = _step(current, segment)
    return current
