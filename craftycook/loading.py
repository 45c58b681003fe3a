import logging
import threading
import time
from typing import Any, Callable, List, Optional, Protocol

from .config import LOADING_DELAY_MS, LOADING_MIN_VISIBLE_MS

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> Any: ...


class Scheduler(Protocol):
    """Anything with ``call_later(seconds, callback)``; an asyncio event loop qualifies."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ThreadTimerScheduler:
    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class LoadingSignal:
    """Counts requests in flight and drives a single loading indicator.

    The indicator only appears once the counter has stayed positive for
    ``delay_ms`` and, once shown, stays up for at least ``min_visible_ms``.
    Every timer callback re-reads the counter instead of trusting the state
    it was scheduled under.
    """

    def __init__(
        self,
        delay_ms: int = LOADING_DELAY_MS,
        min_visible_ms: int = LOADING_MIN_VISIBLE_MS,
        scheduler: Optional[Scheduler] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.delay_ms = delay_ms
        self.min_visible_ms = min_visible_ms
        self.scheduler = scheduler or ThreadTimerScheduler()
        self.clock = clock
        self.active = 0
        self.is_visible = False
        self.last_show_at = 0.0
        self._lock = threading.RLock()
        self._show_timer: Optional[TimerHandle] = None
        self._hide_timer: Optional[TimerHandle] = None
        self._listeners: List[Callable[[bool], None]] = []

    def subscribe(self, listener: Callable[[bool], None]) -> None:
        self._listeners.append(listener)

    @property
    def pending_timers(self) -> int:
        return sum(1 for handle in (self._show_timer, self._hide_timer) if handle is not None)

    def _set_visible(self, visible: bool) -> None:
        if visible == self.is_visible:
            return
        self.is_visible = visible
        if visible:
            self.last_show_at = self.clock()
        logger.debug("Loading indicator %s (active=%d)", "shown" if visible else "hidden", self.active)
        for listener in list(self._listeners):
            listener(visible)

    def _schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        return self.scheduler.call_later(max(delay_ms, 0) / 1000.0, callback)

    def start(self) -> None:
        with self._lock:
            self.active += 1
            # One pending show serves every request that starts before it fires.
            if not self.is_visible and self._show_timer is None:
                self._show_timer = self._schedule(self.delay_ms, self._on_show_timer)

    def stop(self) -> None:
        with self._lock:
            self.active = max(0, self.active - 1)
            if self.active > 0 or not self.is_visible:
                return
            elapsed_ms = (self.clock() - self.last_show_at) * 1000.0
            if elapsed_ms < self.min_visible_ms:
                if self._hide_timer is None:
                    self._hide_timer = self._schedule(self.min_visible_ms - elapsed_ms, self._on_hide_timer)
            else:
                self._cancel_hide()
                self._set_visible(False)

    def _cancel_hide(self) -> None:
        if self._hide_timer is not None:
            self._hide_timer.cancel()
            self._hide_timer = None

    def _on_show_timer(self) -> None:
        with self._lock:
            self._show_timer = None
            if self.active > 0 and not self.is_visible:
                self._set_visible(True)

    def _on_hide_timer(self) -> None:
        with self._lock:
            self._hide_timer = None
            # Scheduled for the remaining dwell time; only the counter needs a re-check.
            if self.active > 0 or not self.is_visible:
                return
            self._set_visible(False)

    def track(self):
        """Context manager bracketing one request."""
        return _Tracked(self)

    def close(self) -> None:
        with self._lock:
            if self._show_timer is not None:
                self._show_timer.cancel()
                self._show_timer = None
            self._cancel_hide()
            self.active = 0
            self._set_visible(False)


class _Tracked:
    def __init__(self, signal: LoadingSignal) -> None:
        self.signal = signal

    def __enter__(self) -> LoadingSignal:
        self.signal.start()
        return self.signal

    def __exit__(self, *exc_info: Any) -> None:
        self.signal.stop()
