"""
Small utilities shared across the graph mapper package.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """
    Compute-once cell wrapping a zero-argument resolver.

    The resolver runs on the first call and its result is cached for the
    lifetime of the cell. A resolver that raises leaves the cell unresolved,
    so a later call retries it.

    Example:
        ```python
            cell = Lazy(lambda: registry.get("address"))
            cell() is cell()  # True, the lookup runs once
        ```
    """

    __slots__ = ("_resolver", "_value", "_resolved")

    def __init__(self, resolver: Callable[[], T]):
        self._resolver: Callable[[], T] | None = resolver
        self._value: T | None = None
        self._resolved = False

    @classmethod
    def resolved(cls, value: T) -> "Lazy[T]":
        """Create a cell that already holds `value`."""
        cell = cls(lambda: value)
        cell()
        return cell

    @property
    def is_resolved(self) -> bool:
        return self._resolved

    def __call__(self) -> T:
        if not self._resolved:
            self._value = self._resolver()
            self._resolved = True
            self._resolver = None
        return self._value

    def __repr__(self) -> str:
        state = "resolved" if self._resolved else "pending"
        return f"<Lazy {state}>"
