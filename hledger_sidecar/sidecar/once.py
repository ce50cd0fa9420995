"""
Single-assignment cell shared across threads.
"""

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

_UNSET = object()


class SetOnce(Generic[T]):
    """
    A value that can be written at most once.

    Reads never take the lock: the stored reference is swapped in a single
    assignment, so readers see either the sentinel or the final value.
    """

    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value: object = _UNSET

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> Optional[T]:
        """Return the stored value, or None if nothing was written yet."""
        value = self._value
        if value is _UNSET:
            return None
        return value  # type: ignore[return-value]

    def set(self, value: T) -> bool:
        """
        Store ``value`` unless a value is already present.

        Returns:
            True if this call performed the write, False if it was discarded.
        """
        with self._lock:
            if self._value is not _UNSET:
                return False
            self._value = value
            return True

    def get_or_init(self, factory: Callable[[], T]) -> T:
        """Return the stored value, computing it with ``factory`` on first use."""
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = factory()
            return self._value  # type: ignore[return-value]
