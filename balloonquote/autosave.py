"""Debounced write-behind for session persistence."""

from __future__ import annotations

from typing import Callable, Protocol


class TimerHandle(Protocol):
    def stop(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


class Debouncer:
    """Run ``callback`` once, ``delay`` seconds after the last ``trigger``.

    ``schedule(delay, fn)`` must return a handle with ``stop()``; Textual's
    ``App.set_timer`` fits directly.
    """

    def __init__(self, schedule: Scheduler, delay: float, callback: Callable[[], None]) -> None:
        self._schedule = schedule
        self.delay = delay
        self._callback = callback
        self._pending: TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self) -> None:
        self.cancel()
        self._pending = self._schedule(self.delay, self._fire)

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.stop()
            self._pending = None

    def flush(self) -> None:
        """Run a pending write now instead of waiting for the timer."""
        if self._pending is None:
            return
        self.cancel()
        self._callback()

    def _fire(self) -> None:
        self._pending = None
        self._callback()
