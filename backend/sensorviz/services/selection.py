"""
Selection coordinator.

Holds the one "selected sample" shared by the chart and map views. Either
view may write it; every write replaces the value (last write wins) and
notifies subscribers synchronously.

The value is a timestamp string and is never checked against the current
dataset. Views must treat a timestamp they cannot find as "nothing
selected".
"""

import logging
from typing import Callable, Optional


logger = logging.getLogger(__name__)

SelectionListener = Callable[[Optional[str]], None]


class SelectionCoordinator:
    """Single shared selection cell with subscribe/notify."""

    def __init__(self):
        self._current: Optional[str] = None
        self._listeners: list[SelectionListener] = []

    def current(self) -> Optional[str]:
        return self._current

    def select(self, timestamp: str) -> None:
        """Replace the current selection unconditionally."""
        self._current = timestamp
        logger.debug(f"Selected sample: {timestamp}")
        self._notify()

    def clear(self) -> None:
        """Reset the selection to none."""
        self._current = None
        self._notify()

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """
        Register a listener called with the new value after every change.

        Returns a function that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._current)
