"""Id normalization shared by adapters. "1", 1 and 1.0 name the same integer key."""

from typing import Any, Callable, Iterable, List, Optional, TypeVar

K = TypeVar("K")


def to_int_id(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def to_str_id(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    return text or None


def unique_ids(values: Iterable[Any], normalize: Callable[[Any], Optional[K]]) -> List[K]:
    """Normalize, drop unusable ids, de-duplicate keeping first-seen order."""
    seen: dict[K, None] = {}
    for value in values:
        key = normalize(value)
        if key is not None:
            seen.setdefault(key, None)
    return list(seen)
