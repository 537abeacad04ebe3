"""
Dotted-path access over nested key-value trees.

Paths are dot-delimited strings such as ``"Person.Address.City"``. Reads never
raise: a path that cannot be followed yields `MISSING`. Writes follow the
sparse assignment rule: assigning `MISSING` leaves the tree untouched, so
mapping absent data never fabricates empty containers.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any, Final

PATH_SEPARATOR: Final = "."


class _Missing:
    """Marker for an absent value. Distinct from ``None``, which is real data."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return "MISSING"


MISSING: Final = _Missing()


def is_container(value: Any) -> bool:
    """Keyed, non-sequence container that paths can descend into."""
    return isinstance(value, Mapping)


def split_path(path: str) -> list[str]:
    return path.split(PATH_SEPARATOR) if path else []


def join_path(*parts: str | None) -> str:
    """Join path parts, skipping empty ones."""
    return PATH_SEPARATOR.join(part for part in parts if part)


def _index(container: Any, segment: str) -> int | None:
    if isinstance(container, (list, tuple)) and segment.isdigit():
        return int(segment)
    return None


def get_path(tree: Any, path: str) -> Any:
    """Return the value at `path`, or `MISSING` if any segment is absent."""
    current = tree
    for segment in split_path(path):
        if isinstance(current, Mapping):
            if segment not in current:
                return MISSING
            current = current[segment]
            continue

        index = _index(current, segment)
        if index is None or index >= len(current):
            return MISSING
        current = current[index]
    return current


def _child_container(container: Any, segment: str) -> Any:
    index = _index(container, segment)
    if index is not None and index < len(container):
        child = container[index]
        if not isinstance(child, (MutableMapping, list)):
            child = container[index] = {}
        return child

    child = container.get(segment) if isinstance(container, Mapping) else None
    if not isinstance(child, (MutableMapping, list)):
        child = {}
        _assign(container, segment, child)
    return child


def _assign(container: Any, segment: str, value: Any) -> None:
    index = _index(container, segment)
    if index is None:
        container[segment] = value
        return

    if index >= len(container):
        container.extend([None] * (index - len(container) + 1))
    container[index] = value


def set_path(tree: MutableMapping, path: str, value: Any) -> None:
    """Assign `value` at `path`, creating intermediate dicts as needed.

    Does nothing at all when `value` is `MISSING`.
    """
    if value is MISSING:
        return

    *parents, last = split_path(path)
    container = tree
    for segment in parents:
        container = _child_container(container, segment)
    _assign(container, last, value)


def merge_tree(tree: MutableMapping, other: Mapping) -> None:
    """Merge `other` into `tree` in place.

    Mappings present on both sides merge recursively, any other value in
    `other` replaces the one in `tree`.
    """
    for key, value in other.items():
        existing = tree.get(key)
        if isinstance(value, Mapping) and isinstance(existing, MutableMapping):
            merge_tree(existing, value)
        else:
            tree[key] = value


def ensure_container(tree: MutableMapping, path: str) -> MutableMapping:
    """Return the dict stored at `path`, creating it if absent."""
    container = tree
    for segment in split_path(path):
        container = _child_container(container, segment)
    return container
