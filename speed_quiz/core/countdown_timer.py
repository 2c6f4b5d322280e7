"""Cancellable countdown built on a periodic QTimer."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QTimer, Signal


class CountdownTimer(QObject):
    """Counts down from a fixed duration and reports expiry exactly once.

    Remaining time is tracked in whole milliseconds so repeated decrements do
    not accumulate floating point error. All callbacks run on the thread that
    owns the timer.
    """

    stopped = Signal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_interval)
        self._running: bool = False
        self._remaining_ms: int = 0
        self._interval_ms: int = 0
        self._on_tick: Callable[[float], None] | None = None
        self._on_expire: Callable[[], None] | None = None

    def start(
        self,
        duration_seconds: float,
        tick_interval_ms: int,
        on_tick: Callable[[float], None],
        on_expire: Callable[[], None],
    ) -> None:
        """Begin a countdown, cancelling any run already in progress."""
        if duration_seconds <= 0:
            raise ValueError("Countdown duration must be positive.")
        if tick_interval_ms <= 0:
            raise ValueError("Tick interval must be a positive number of milliseconds.")

        self.stop()
        self._remaining_ms = round(duration_seconds * 1000)
        self._interval_ms = tick_interval_ms
        self._on_tick = on_tick
        self._on_expire = on_expire
        self._running = True
        self._timer.setInterval(tick_interval_ms)
        self._timer.start()

    def restart(
        self,
        duration_seconds: float,
        tick_interval_ms: int,
        on_tick: Callable[[float], None],
        on_expire: Callable[[], None],
    ) -> None:
        self.stop()
        self.start(duration_seconds, tick_interval_ms, on_tick, on_expire)

    def stop(self) -> bool:
        """Cancel pending ticks. Returns False when there was nothing to cancel."""
        if not self._running:
            return False
        self._running = False
        self._timer.stop()
        self._on_tick = None
        self._on_expire = None
        self.stopped.emit()
        return True

    def is_running(self) -> bool:
        return self._running

    @property
    def remaining(self) -> float:
        return self._remaining_ms / 1000

    def _on_interval(self) -> None:
        if not self._running:
            return

        self._remaining_ms = max(0, self._remaining_ms - self._interval_ms)
        on_tick = self._on_tick
        if self._remaining_ms > 0:
            if on_tick is not None:
                on_tick(self.remaining)
            return

        on_expire = self._on_expire
        self.stop()
        if on_tick is not None:
            on_tick(0.0)
        if on_expire is not None:
            on_expire()
