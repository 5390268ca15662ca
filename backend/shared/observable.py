"""
Minimal observable value holder.

Reconcilers publish their current state, busy flag and similar values
through ``Observable`` so a UI layer can subscribe instead of polling.
Listeners are called synchronously, in subscription order, on every
``set`` (even when the value is unchanged).
"""

import logging
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[T], None]


class Observable(Generic[T]):
    """
    Holds a single value and notifies subscribers when it is set.

    Example:
        busy = Observable(False)
        unsubscribe = busy.subscribe(lambda value: print("busy:", value))
        busy.set(True)
        unsubscribe()
    """

    def __init__(self, initial: T) -> None:
        self._value = initial
        self._listeners: list[Listener] = []

    @property
    def value(self) -> T:
        """Get the most recently set value."""
        return self._value

    def set(self, value: T) -> None:
        """Replace the value and notify every listener."""
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                # Listener errors never reach the publishing operation
                logger.exception("Observable listener raised")

    def subscribe(self, listener: Listener, emit_current: bool = False) -> Callable[[], None]:
        """
        Register a listener.

        Args:
            listener: Called with each new value
            emit_current: If True, the listener is immediately called with
                          the current value

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)
        if emit_current:
            listener(self._value)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        """Number of registered listeners."""
        return len(self._listeners)


@contextmanager
def busy_scope(busy: Observable[bool]) -> Iterator[None]:
    """
    Set ``busy`` to True for the duration of the block.

    Always resets to False on exit, even if another operation is still
    running; this is a flag, not a counter.
    """
    busy.set(True)
    try:
        yield
    finally:
        busy.set(False)
