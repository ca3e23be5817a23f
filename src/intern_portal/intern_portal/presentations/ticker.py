from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol


class TickHandle(Protocol):
    def cancel(self) -> None:
        raise NotImplementedError


class Ticker(Protocol):
    """Scheduler that calls `callback` every `interval` seconds until cancelled."""

    def every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        raise NotImplementedError


class _ManualHandle:
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualTicker(Ticker):
    """Ticker driven by hand, one `advance()` per elapsed interval."""

    def __init__(self):
        self._handles: list[_ManualHandle] = []

    def every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        handle = _ManualHandle(callback)
        self._handles.append(handle)
        return handle

    @property
    def active(self) -> int:
        return sum(1 for h in self._handles if not h.cancelled)

    def advance(self, ticks: int = 1) -> None:
        for _ in range(ticks):
            self._handles = [h for h in self._handles if not h.cancelled]
            for handle in list(self._handles):
                if not handle.cancelled:
                    handle.callback()


class _TimerHandle:
    def __init__(self, interval: float, callback: Callable[[], None]):
        self._interval = interval
        self._callback = callback
        self._cancelled = threading.Event()
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()

    def _schedule(self) -> None:
        with self._lock:
            if self._cancelled.is_set():
                return
            self._timer = threading.Timer(self._interval, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _fire(self) -> None:
        if self._cancelled.is_set():
            return
        self._callback()
        self._schedule()

    def cancel(self) -> None:
        with self._lock:
            self._cancelled.set()
            if self._timer is not None:
                self._timer.cancel()


class ThreadingTicker(Ticker):
    """Wall-clock ticker built on chained `threading.Timer`s (one daemon thread per tick)."""

    def every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        handle = _TimerHandle(interval, callback)
        handle._schedule()
        return handle
